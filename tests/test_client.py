import re
import unittest
from unittest import mock

from storefront.client import StorefrontAPIError, StorefrontClient, new_session_id


def _response(status_code=200, body=None, text="", reason="OK"):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


class ClientTestCase(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch("storefront.client.requests.Session")
        self.session_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.http = self.session_cls.return_value
        self.http.headers = {}
        self.client = StorefrontClient("http://shop.test/", session_id="session_1_abc", timeout=3.0)

    def test_session_header_is_set(self):
        self.assertEqual(self.http.headers, {"x-session-id": "session_1_abc"})
        self.assertEqual(self.client.base_url, "http://shop.test/api")

    def test_generated_session_id(self):
        self.assertRegex(new_session_id(), re.compile(r"^session_\d+_[a-z0-9]{9}$"))
        self.assertNotEqual(new_session_id(), new_session_id())

    def test_add_to_cart(self):
        self.http.request.return_value = _response(201, {"medicine_id": "med1", "quantity": 2})

        item = self.client.add_to_cart("med1", 2)

        self.assertEqual(item["quantity"], 2)
        self.http.request.assert_called_once_with(
            method="POST",
            url="http://shop.test/api/cart",
            timeout=3.0,
            json={"medicine_id": "med1", "quantity": 2},
        )

    def test_list_medicines_drops_empty_params(self):
        self.http.request.return_value = _response(200, [])
        self.client.list_medicines(search="vitamin")
        _, kwargs = self.http.request.call_args
        self.assertEqual(kwargs["params"], {"search": "vitamin"})
        self.assertEqual(kwargs["url"], "http://shop.test/api/medicines")

    def test_error_body_is_raised(self):
        self.http.request.return_value = _response(
            400, {"message": "Invalid quantity", "errors": [{"field": "quantity", "message": "bad"}]}
        )
        with self.assertRaises(StorefrontAPIError) as ctx:
            self.client.update_quantity("med1", -1)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.message, "Invalid quantity")
        self.assertEqual(ctx.exception.errors[0]["field"], "quantity")

    def test_non_json_error(self):
        self.http.request.return_value = _response(502, None, text="", reason="Bad Gateway")
        with self.assertRaises(StorefrontAPIError) as ctx:
            self.client.clear_cart()
        self.assertEqual(ctx.exception.message, "Bad Gateway")
        self.assertEqual(ctx.exception.errors, [])


if __name__ == "__main__":
    unittest.main()
