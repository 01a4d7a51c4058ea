"""
Tests para la firma de peticiones de Crypton.
"""

import base64
import hashlib
import hmac
import json
import pytest

import sys
from pathlib import Path
src_path = Path(__file__).parent.parent.parent
sys.path.insert(0, str(src_path))

from crypton_bridge.core.enums import ApiAccess, HttpMethod, SignatureEncoding
from crypton_bridge.core.exceptions import AuthenticationError
from crypton_bridge.adapters.crypton.crypton_signer import (
    CryptonSigner,
    build_request,
    extract_params,
    implode_params,
    to_json,
    HEADER_API_KEY,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
)


BASE_URL = "https://api.cryptonbtc.com"


def expected_hex(secret, payload):
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


@pytest.fixture
def signer():
    return CryptonSigner("my-key", "my-secret", clock=lambda: 1528000000000, broker_id="crypton")


class TestSignature:
    """Tests para el calculo de la firma"""

    def test_signature_is_hmac_sha256_hex(self, signer):
        """La firma es HMAC-SHA256 hex de timestamp+method+path+body"""
        sig = signer.signature("1528000000000", "GET", "/balances")

        assert sig == expected_hex("my-secret", "1528000000000GET/balances")
        assert len(sig) == 64

    def test_signature_is_deterministic(self, signer):
        """Mismas entradas producen siempre la misma firma"""
        body = '{"market":"BTC-EUR","side":"buy"}'
        first = signer.signature("1528000000000", "POST", "/orders", body)
        second = signer.signature("1528000000000", "POST", "/orders", body)
        other = CryptonSigner("another-key", "my-secret").signature(
            "1528000000000", "POST", "/orders", body
        )

        assert first == second == other

    def test_signature_changes_with_inputs(self, signer):
        """Cambiar cualquier componente cambia la firma"""
        base = signer.signature("1", "POST", "/orders", "{}")

        assert signer.signature("2", "POST", "/orders", "{}") != base
        assert signer.signature("1", "DELETE", "/orders", "{}") != base
        assert signer.signature("1", "POST", "/fills", "{}") != base
        assert signer.signature("1", "POST", "/orders", "") != base
        assert CryptonSigner("my-key", "other").signature("1", "POST", "/orders", "{}") != base

    def test_base64_encoding(self):
        """La codificacion base64 usa el mismo digest"""
        signer = CryptonSigner("k", "s", encoding=SignatureEncoding.BASE64)
        digest = hmac.new(b"s", b"1GET/balances", hashlib.sha256).digest()

        assert signer.signature("1", "GET", "/balances") == base64.b64encode(digest).decode()


class TestSignHeaders:
    """Tests para los headers de autenticacion"""

    def test_headers(self, signer):
        """Los headers incluyen key, firma, timestamp y content type"""
        headers = signer.sign("GET", "/balances")

        assert headers[HEADER_API_KEY] == "my-key"
        assert headers[HEADER_TIMESTAMP] == "1528000000000"
        assert headers[HEADER_SIGNATURE] == expected_hex("my-secret", "1528000000000GET/balances")
        assert headers["Content-Type"] == "application/json"

    def test_explicit_timestamp(self, signer):
        """Un timestamp explicito reemplaza al reloj"""
        headers = signer.sign("GET", "/balances", timestamp="42")

        assert headers[HEADER_TIMESTAMP] == "42"
        assert headers[HEADER_SIGNATURE] == signer.signature("42", "GET", "/balances")

    def test_timestamp_is_milliseconds_string(self):
        """Con el reloj por defecto el timestamp son ms desde epoch"""
        headers = CryptonSigner("k", "s").sign("GET", "/balances")

        assert headers[HEADER_TIMESTAMP].isdigit()
        assert len(headers[HEADER_TIMESTAMP]) >= 13

    @pytest.mark.parametrize("api_key,api_secret", [
        (None, "secret"),
        ("key", None),
        (None, None),
        ("", ""),
    ])
    def test_missing_credentials(self, api_key, api_secret):
        """Sin key o secreto la firma falla"""
        signer = CryptonSigner(api_key, api_secret, broker_id="crypton")

        assert signer.has_credentials is False
        with pytest.raises(AuthenticationError) as exc_info:
            signer.sign("GET", "/balances")
        assert exc_info.value.broker_id == "crypton"

    def test_repr_hides_secret(self, signer):
        """El repr no expone credenciales"""
        text = repr(signer)

        assert "my-secret" not in text
        assert "my-key" not in text


class TestPathHelpers:
    """Tests para la resolucion de plantillas de ruta"""

    def test_extract_params(self):
        assert extract_params("markets/{id}/orderbook") == ["id"]
        assert extract_params("deposit_address/{currency}") == ["currency"]
        assert extract_params("tickers") == []

    def test_implode_params(self):
        assert implode_params("orders/{id}", {"id": 42}) == "orders/42"
        assert implode_params("markets/{id}/trades", {"id": "BTC-EUR", "limit": 5}) == "markets/BTC-EUR/trades"

    def test_to_json_is_compact(self):
        assert to_json({"market": "BTC-EUR", "size": "1"}) == '{"market":"BTC-EUR","size":"1"}'


class TestBuildRequest:
    """Tests para la construccion de peticiones"""

    def test_public_get_is_not_signed(self, signer):
        """Las peticiones publicas no llevan headers de firma"""
        request = build_request(
            BASE_URL, "markets/{id}/trades", ApiAccess.PUBLIC, HttpMethod.GET,
            {"id": "BTC-EUR", "limit": 10}, signer,
        )

        assert request["url"] == "https://api.cryptonbtc.com/markets/BTC-EUR/trades?limit=10"
        assert request["method"] == "GET"
        assert request["body"] is None
        assert request["headers"] is None

    def test_public_request_without_credentials(self):
        """Una peticion publica funciona sin credenciales"""
        request = build_request(BASE_URL, "tickers", signer=CryptonSigner())

        assert request["url"] == "https://api.cryptonbtc.com/tickers"

    def test_private_get_signs_query(self, signer):
        """En GET la query forma parte del path firmado"""
        request = build_request(
            BASE_URL, "orders", ApiAccess.PRIVATE, HttpMethod.GET,
            {"market": "BTC-EUR"}, signer,
        )

        assert request["url"] == "https://api.cryptonbtc.com/orders?market=BTC-EUR"
        assert request["body"] is None
        assert request["headers"][HEADER_SIGNATURE] == expected_hex(
            "my-secret", "1528000000000GET/orders?market=BTC-EUR"
        )

    def test_private_post_signs_body(self, signer):
        """En POST los parametros van al cuerpo JSON y se firman"""
        params = {"market": "BTC-EUR", "side": "buy", "type": "limit", "size": "0.5", "price": "30000"}
        request = build_request(
            BASE_URL, "orders", ApiAccess.PRIVATE, HttpMethod.POST, params, signer,
        )

        assert request["url"] == "https://api.cryptonbtc.com/orders"
        assert json.loads(request["body"]) == params
        assert request["headers"][HEADER_SIGNATURE] == expected_hex(
            "my-secret", "1528000000000POST/orders" + request["body"]
        )

    def test_private_delete_without_body(self, signer):
        """DELETE sin parametros extra firma un cuerpo vacio"""
        request = build_request(
            BASE_URL, "orders/{id}", ApiAccess.PRIVATE, HttpMethod.DELETE, {"id": "42"}, signer,
        )

        assert request["url"] == "https://api.cryptonbtc.com/orders/42"
        assert request["body"] is None
        assert request["headers"][HEADER_SIGNATURE] == expected_hex(
            "my-secret", "1528000000000DELETE/orders/42"
        )

    def test_private_without_credentials_raises(self):
        """Peticion privada sin credenciales falla antes de enviarse"""
        with pytest.raises(AuthenticationError):
            build_request(BASE_URL, "balances", ApiAccess.PRIVATE, signer=CryptonSigner())

    def test_private_without_signer_raises(self):
        with pytest.raises(AuthenticationError):
            build_request(BASE_URL, "balances", ApiAccess.PRIVATE)

    def test_base_url_trailing_slash(self, signer):
        request = build_request(BASE_URL + "/", "tickers", signer=signer)

        assert request["url"] == "https://api.cryptonbtc.com/tickers"
