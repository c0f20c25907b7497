import pytest

from enzona_payments.core import codec
from enzona_payments.core.models import (
    Amount,
    AmountDetails,
    CreateClaimRequest,
    CreatePaymentRequest,
    Item,
    PaymentDetails,
    RefundsList,
)


def test_payload_uses_camel_case_and_drops_unset_fields():
    request = CreatePaymentRequest(
        merchant_uuid="m-1",
        merchant_op_id=42,
        amount=Amount(total=10.5, details=AmountDetails(shipping=1.0)),
        items=[Item(quantity=1, price=9.5, name="Coffee")],
    )

    assert codec.to_payload(request) == {
        "merchantUuid": "m-1",
        "merchantOpId": 42,
        "amount": {"total": 10.5, "details": {"shipping": 1.0}},
        "items": [{"quantity": 1, "price": 9.5, "name": "Coffee"}],
    }


def test_explicit_wire_names():
    payload = codec.to_payload(
        CreateClaimRequest(type_claim="T", operation_number="123", customer_email="a@b.cu")
    )
    assert payload == {"typeClaim": "T", "no_operacionEZ": "123", "correo_cliente_afec": "a@b.cu"}


def test_dumps_never_emits_null():
    assert "null" not in codec.dumps(CreatePaymentRequest(description="x"))


def test_decode_ignores_unknown_fields_and_defaults_missing_ones():
    details = codec.loads(
        '{"transactionUuid":"t-1","statusCode":"1111","brandNewField":true,'
        '"links":[{"rel":"confirm","href":"https://x/confirm","method":"POST"}]}',
        PaymentDetails,
    )

    assert details.transaction_uuid == "t-1"
    assert details.status_code == "1111"
    assert details.amount is None
    assert details.items == []
    assert details.link("confirm") == "https://x/confirm"
    assert details.link("missing") is None


def test_decode_nested_lists_and_nulls():
    refunds = codec.loads(
        '{"refunds":[{"transactionUuid":"r-1","amount":{"total":5,"details":null},"items":null}]}',
        RefundsList,
    )
    refund = refunds.refunds[0]
    assert refund.transaction_uuid == "r-1"
    assert refund.amount.total == 5.0
    assert isinstance(refund.amount.total, float)
    assert refund.items == []


def test_decode_without_shape_returns_raw_json():
    assert codec.loads('{"a":[1,2]}', None) == {"a": [1, 2]}


@pytest.mark.parametrize("text", ["not json", "[1,2]", '"text"'])
def test_decode_rejects_bodies_that_do_not_fit(text):
    with pytest.raises(ValueError):
        codec.loads(text, PaymentDetails)


def test_null_document_does_not_fit_a_record():
    with pytest.raises(ValueError):
        codec.loads("null", PaymentDetails)
    assert codec.loads("null", None) is None
