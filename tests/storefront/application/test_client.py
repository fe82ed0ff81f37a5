import httpx
import pytest
from storefront.client import OrderSubmissionError, StorefrontClient, extract_error_message


def _response(status_code, body):
    return httpx.Response(status_code, json=body)


class TestExtractErrorMessage:
    def test_prefers_error_field(self):
        response = _response(400, {"error": "Produit introuvable", "message": "ignored"})
        assert extract_error_message(response, "fallback") == "Produit introuvable"

    def test_reads_fastapi_validation_list(self):
        response = _response(422, {"detail": [{"loc": ["body", "items"], "msg": "List should have at least 1 item"}]})
        assert extract_error_message(response, "fallback") == "List should have at least 1 item"

    def test_reads_field_mapping(self):
        response = _response(400, {"detail": {"coupon_code": ["Code promo invalide ou expiré"]}})
        assert extract_error_message(response, "fallback") == "Code promo invalide ou expiré"

    def test_falls_back_on_non_json(self):
        response = httpx.Response(500, text="<html>oops</html>")
        assert extract_error_message(response, "fallback") == "fallback"


class TestStorefrontClient:
    def test_reads_drop_empty_filters(self):
        seen = []

        def handler(request):
            seen.append(request.url)
            return httpx.Response(200, json={"data": [], "pagination": {}})

        client = StorefrontClient(client=httpx.Client(base_url="http://maeva.test", transport=httpx.MockTransport(handler)))
        client.list_products(category="karakou", search=None, limit=4)

        assert seen[0].path == "/api/products"
        assert dict(seen[0].params) == {"category": "karakou", "limit": "4"}

    def test_related_products_excludes_current(self):
        seen = []

        def handler(request):
            seen.append(dict(request.url.params))
            return httpx.Response(200, json={"data": [{"id": "p2"}]})

        client = StorefrontClient(client=httpx.Client(base_url="http://maeva.test", transport=httpx.MockTransport(handler)))

        related = client.related_products({"id": "p1", "category": "karakou"})

        assert related == [{"id": "p2"}]
        assert seen[0] == {"category": "karakou", "exclude": "p1", "limit": "4"}

    def test_list_categories(self):
        def handler(request):
            assert request.url.path == "/api/categories"
            return httpx.Response(200, json={"success": True, "data": ["karakou", "caftan"]})

        client = StorefrontClient(client=httpx.Client(base_url="http://maeva.test", transport=httpx.MockTransport(handler)))

        assert client.list_categories() == ["karakou", "caftan"]

    def test_unreachable_api_raises_submission_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        client = StorefrontClient(client=httpx.Client(base_url="http://maeva.test", transport=httpx.MockTransport(handler)))

        with pytest.raises(OrderSubmissionError):
            client.submit_order({"items": []})
