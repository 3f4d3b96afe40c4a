from datetime import datetime
from decimal import Decimal

import pytest
import requests

from backend.pagopar import (
    PagoPar,
    PagoParConfigError,
    PagoParGatewayError,
    PagoParNetworkError,
    PagoParValidationError,
    generate_signature,
    API_ERROR,
    NETWORK_ERROR,
)
from backend.pagopar.client import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_VERSION,
    REFUND_FIELDS,
    SHIPMENT_FIELDS,
)

BASE = "https://api.pagopar.test/api"


def _transaction_data(**overrides):
    data = {
        "token_publico": "test-public-key",
        "monto_total": 100000,
        "tipo_pedido": "venta_productos",
        "fecha_maxima_pago": datetime(2026, 10, 19, 12, 0, 0),
        "compras_items": [{"nombre": "Producto 1", "cantidad": 1, "precio": 100000}],
        "comprador": {"nombre": "Ana", "email": "a@x.com", "telefono": "0981000000", "documento": "1234567"},
    }
    data.update(overrides)
    return data


def _shipment_data(**overrides):
    data = {
        "destinatario": "Ana",
        "direccion": "Av. Mcal. López 123",
        "ciudad": "Asunción",
        "telefono": "0981000000",
        "email": "a@x.com",
        "productos": [{"nombre": "Producto 1", "peso": 1}],
        "monto_total": 100000,
        "peso_total": 1,
    }
    data.update(overrides)
    return data


# --- Construction ---

@pytest.mark.parametrize("public_key,private_key", [("", "priv"), ("pub", ""), (None, "priv"), ("pub", None)])
def test_constructor_requires_both_keys(fake_session, public_key, private_key):
    with pytest.raises(PagoParConfigError) as exc:
        PagoPar(public_key, private_key, session=fake_session)
    assert exc.value.kind == "config"
    assert fake_session.calls == []


def test_constructor_defaults(fake_session):
    client = PagoPar("pub", "priv", session=fake_session)
    assert client.base_url == DEFAULT_BASE_URL == "https://api.pagopar.com/api"
    assert client.version == DEFAULT_VERSION == "1.2"
    assert client.timeout == DEFAULT_TIMEOUT_MS == 10000


def test_constructor_trims_base_url_and_hides_private_key(fake_session):
    client = PagoPar("pub", "super-secret", base_url=BASE + "/", session=fake_session)
    assert client.base_url == BASE
    assert "super-secret" not in repr(client)


def test_context_manager_closes_session(fake_session):
    with PagoPar("pub", "priv", session=fake_session):
        pass
    assert fake_session.closed is True


# --- Construction des requêtes ---

def test_create_transaction_posts_signed_payload(pagopar_client, fake_session, make_response):
    fake_session.response = make_response(200, {"url_pago": "https://pay", "token_transaccion": "tok"})

    result = pagopar_client.create_transaction(_transaction_data())

    assert result == {"url_pago": "https://pay", "token_transaccion": "tok"}
    assert len(fake_session.calls) == 1
    call = fake_session.calls[0]
    assert call["url"] == f"{BASE}/1.2/pedidos/crear/"
    assert call["headers"] == {"Content-Type": "application/json"}
    assert call["timeout"] == 10

    body = dict(call["json"])
    firma = body.pop("firma")
    assert body["token"] == "test-public-key"
    assert body["fecha_maxima_pago"] == "2026-10-19T12:00:00.000Z"
    assert body["monto_total"] == 100000
    # La firma couvre exactement le payload envoyé (hors firma)
    assert firma == generate_signature("test-private-key", body)


def test_create_transaction_does_not_mutate_input(pagopar_client):
    data = _transaction_data()
    pagopar_client.create_transaction(data)
    assert isinstance(data["fecha_maxima_pago"], datetime)
    assert "token" not in data


def test_create_transaction_rejects_invalid_date(pagopar_client, fake_session):
    with pytest.raises(PagoParValidationError) as exc:
        pagopar_client.create_transaction(_transaction_data(fecha_maxima_pago="mañana"))
    assert exc.value.field == "fecha_maxima_pago"
    assert fake_session.calls == []


@pytest.mark.parametrize("method,args,endpoint,expected", [
    ("get_transaction", ("tok-1",), "/pedidos/traer/", {"token_transaccion": "tok-1"}),
    ("list_payment_methods", (), "/medios-de-pago/lista/", {}),
    ("create_refund", ({"token_transaccion": "tok-1", "monto": 5000},), "/reembolsos/crear/",
     {"token_transaccion": "tok-1", "monto": 5000}),
    ("get_shipment_status", ("ENV-9",), "/envios/estado/", {"codigo_envio": "ENV-9"}),
    ("list_cities", (), "/ciudades/lista/", {}),
])
def test_operations_hit_their_endpoint(pagopar_client, fake_session, method, args, endpoint, expected):
    getattr(pagopar_client, method)(*args)

    call = fake_session.calls[0]
    assert call["url"] == f"{BASE}/1.2{endpoint}"
    body = dict(call["json"])
    firma = body.pop("firma")
    assert body == {"token": "test-public-key", **expected}
    assert firma == generate_signature("test-private-key", body)


def test_create_shipment_sends_all_fields(pagopar_client, fake_session):
    pagopar_client.create_shipment(_shipment_data())
    call = fake_session.calls[0]
    assert call["url"] == f"{BASE}/1.2/envios/crear/"
    assert call["json"]["ciudad"] == "Asunción"
    assert call["json"]["token"] == "test-public-key"


def test_custom_version_and_timeout(fake_session):
    client = PagoPar("pub", "priv", base_url=BASE, version="2.0", timeout=2500, session=fake_session)
    client.list_cities()
    assert fake_session.calls[0]["url"] == f"{BASE}/2.0/ciudades/lista/"
    assert fake_session.calls[0]["timeout"] == 2.5


# --- Validation locale ---

@pytest.mark.parametrize("missing", [
    "token_publico", "monto_total", "tipo_pedido", "fecha_maxima_pago", "compras_items", "comprador",
])
def test_create_transaction_missing_field(pagopar_client, fake_session, missing):
    data = _transaction_data()
    data.pop(missing)
    with pytest.raises(PagoParValidationError) as exc:
        pagopar_client.create_transaction(data)
    assert exc.value.field == missing
    assert missing in exc.value.message
    assert fake_session.calls == []


def test_create_transaction_empty_items_is_missing(pagopar_client, fake_session):
    with pytest.raises(PagoParValidationError) as exc:
        pagopar_client.create_transaction(_transaction_data(compras_items=[]))
    assert exc.value.field == "compras_items"
    assert fake_session.calls == []


@pytest.mark.parametrize("call,field", [
    (lambda c: c.get_transaction(""), "token_transaccion"),
    (lambda c: c.get_shipment_status(None), "codigo_envio"),
    (lambda c: c.create_refund({"token_transaccion": "t"}), "monto"),
    (lambda c: c.create_refund(None), "token_transaccion"),
    (lambda c: c.create_shipment({"destinatario": "Ana"}), "direccion"),
])
def test_other_operations_validate_before_sending(pagopar_client, fake_session, call, field):
    with pytest.raises(PagoParValidationError) as exc:
        call(pagopar_client)
    assert exc.value.field == field
    assert exc.value.to_dict()["code"] == "VALIDATION_ERROR"
    assert fake_session.calls == []


# --- Erreurs passerelle / réseau ---

def test_gateway_error_carries_status_code_and_body(pagopar_client, fake_session, pagopar_logger, make_response):
    body = {"respuesta": False, "codigo": "TOKEN_INVALIDO", "mensaje": "Token no válido"}
    fake_session.response = make_response(400, body)

    with pytest.raises(PagoParGatewayError) as exc:
        pagopar_client.get_transaction("tok")

    err = exc.value
    assert err.kind == "gateway"
    assert err.status == 400
    assert err.code == "TOKEN_INVALIDO"
    assert err.message == "Token no válido"
    assert err.data == body
    assert isinstance(err.__cause__, requests.HTTPError)
    pagopar_logger.error.assert_called_once()
    assert f"{BASE}/1.2/pedidos/traer/" in pagopar_logger.error.call_args.args


def test_gateway_error_defaults_when_body_is_not_json(pagopar_client, fake_session, make_response):
    fake_session.response = make_response(503, None, text="<html>Service Unavailable</html>")

    with pytest.raises(PagoParGatewayError) as exc:
        pagopar_client.list_payment_methods()

    assert exc.value.status == 503
    assert exc.value.code == API_ERROR
    assert exc.value.message == "Error en la API PagoPar"
    assert exc.value.data == "<html>Service Unavailable</html>"


@pytest.mark.parametrize("error", [
    requests.ConnectionError("Connection refused"),
    requests.Timeout("Read timed out"),
])
def test_network_error_is_normalized(fake_session, pagopar_logger, error):
    fake_session.error = error
    client = PagoPar("pub", "priv", base_url=BASE, session=fake_session, logger=pagopar_logger)

    with pytest.raises(PagoParNetworkError) as exc:
        client.list_cities()

    assert exc.value.code == NETWORK_ERROR
    assert exc.value.message == str(error)
    assert exc.value.status is None
    assert exc.value.__cause__ is error
    assert f"{BASE}/1.2/ciudades/lista/" in pagopar_logger.error.call_args.args


def test_network_error_default_message(fake_session):
    fake_session.error = requests.ConnectionError()
    client = PagoPar("pub", "priv", session=fake_session)
    with pytest.raises(PagoParNetworkError) as exc:
        client.list_cities()
    assert exc.value.message == "Error de conexión con PagoPar"


def test_success_is_logged_at_debug(pagopar_client, pagopar_logger):
    pagopar_client.list_cities()
    pagopar_logger.debug.assert_called_once()
    pagopar_logger.error.assert_not_called()


def test_non_json_success_body_returned_as_text(pagopar_client, fake_session, make_response):
    fake_session.response = make_response(200, None, text="OK")
    assert pagopar_client.list_cities() == "OK"


@pytest.mark.parametrize("missing", SHIPMENT_FIELDS)
def test_create_shipment_missing_field(pagopar_client, fake_session, missing):
    data = _shipment_data()
    data.pop(missing)
    with pytest.raises(PagoParValidationError) as exc:
        pagopar_client.create_shipment(data)
    assert exc.value.field == missing
    assert fake_session.calls == []


@pytest.mark.parametrize("missing", REFUND_FIELDS)
def test_create_refund_missing_field(pagopar_client, fake_session, missing):
    data = {"token_transaccion": "tok-1", "monto": 5000}
    data.pop(missing)
    with pytest.raises(PagoParValidationError) as exc:
        pagopar_client.create_refund(data)
    assert exc.value.field == missing
    assert fake_session.calls == []


# --- Sérialisation ---

def test_decimal_amounts_are_sent_as_numbers(pagopar_client, fake_session):
    pagopar_client.create_refund({"token_transaccion": "tok-1", "monto": Decimal("5000")})

    body = dict(fake_session.calls[0]["json"])
    firma = body.pop("firma")
    assert body == {"token": "test-public-key", "token_transaccion": "tok-1", "monto": 5000}
    assert firma == generate_signature("test-private-key", body)


def test_fractional_decimal_is_sent_as_float(pagopar_client, fake_session):
    pagopar_client.create_shipment(_shipment_data(peso_total=Decimal("1.5")))
    assert fake_session.calls[0]["json"]["peso_total"] == 1.5


def test_unserializable_value_is_a_validation_error(pagopar_client, fake_session):
    with pytest.raises(PagoParValidationError) as exc:
        pagopar_client.create_refund({"token_transaccion": "tok-1", "monto": object()})
    assert exc.value.field == "monto"
    assert isinstance(exc.value.__cause__, TypeError)
    assert fake_session.calls == []
