"""Tests for AWS Lambda handler."""

import base64
import json

from lambda_handler import lambda_handler


class TestLambdaHandler:
    """Test the Lambda handler routes and responses."""

    def test_health_check(self):
        """GET /health returns healthy status."""
        event = {"httpMethod": "GET", "path": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "healthy"

    def test_api_info(self):
        """GET /api returns API information."""
        event = {"httpMethod": "GET", "path": "/api"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "ok"
        assert "/quote" in body["endpoints"]

    def test_cors_preflight(self):
        """OPTIONS requests return CORS headers."""
        event = {"httpMethod": "OPTIONS", "path": "/quote"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert "Access-Control-Allow-Origin" in response["headers"]
        assert "Access-Control-Allow-Methods" in response["headers"]

    def test_not_found(self):
        """Unknown paths return 404."""
        event = {"httpMethod": "GET", "path": "/unknown"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 404

    def test_wrong_method_is_not_found(self):
        event = {"httpMethod": "GET", "path": "/quote"}
        assert lambda_handler(event, None)["statusCode"] == 404

    def test_fees_calculate(self):
        """POST /fees/calculate splits a transaction."""
        payload = {"amount": 10000, "fee_percentage": 15}
        event = {"httpMethod": "POST", "path": "/fees/calculate", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body == {"transaction_amount": 10000, "stripe_fee": 319, "platform_fee": 1500, "partner_amount": 8181}

    def test_quote_http_api_format(self):
        """HTTP API (v2) events use rawPath and requestContext.http.method."""
        event = {
            "rawPath": "/quote",
            "requestContext": {"http": {"method": "POST"}},
            "body": json.dumps({"order_amount": 500, "coupons": []}),
        }
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["best_combination"]["final_amount"] == 500

    def test_base64_body(self):
        payload = json.dumps({"total_amount": 10000, "fee_percentage": 15}).encode("utf-8")
        event = {
            "httpMethod": "POST",
            "path": "/fees/application",
            "isBase64Encoded": True,
            "body": base64.b64encode(payload).decode("ascii"),
        }
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["partner_amount"] == 8500

    def test_empty_body(self):
        event = {"httpMethod": "POST", "path": "/quote", "body": ""}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["error"] == "No input data provided"

    def test_invalid_json(self):
        event = {"httpMethod": "POST", "path": "/quote", "body": "{oops"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert "Invalid JSON" in json.loads(response["body"])["error"]

    def test_validation_error(self):
        """Out-of-range fee percentage is a client error."""
        event = {"httpMethod": "POST", "path": "/fees/calculate", "body": json.dumps({"amount": 100, "fee_percentage": 150})}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["status"] == "validation_failed"
        assert "Fee percentage must be between 0 and 100" in body["error"]

    def test_missing_field(self):
        event = {"httpMethod": "POST", "path": "/coupons/optimize", "body": json.dumps({"coupons": []})}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert json.loads(response["body"])["status"] == "validation_failed"
