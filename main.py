from flask import Flask, request, jsonify
from flask_cors import CORS
from pricing import PricingProcessor
import os
import logging

# Configure logging
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (checkout and partner dashboards call the API from the browser)
CORS(app)

# Initialize the pricing processor
processor = PricingProcessor(currency_symbol=os.environ.get("CURRENCY_SYMBOL", "R$"))

ENDPOINTS = {
    "quote": "/quote [POST]",
    "discount": "/coupons/discount [POST]",
    "validate": "/coupons/validate [POST]",
    "conflicts": "/coupons/conflicts [POST]",
    "optimize": "/coupons/optimize [POST]",
    "savings": "/coupons/savings [POST]",
    "fees": "/fees/calculate [POST]",
    "application_fee": "/fees/application [POST]",
    "health": "/health [GET]",
}


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Pricing & Settlement Engine API",
        "version": "1.0",
        "endpoints": ENDPOINTS,
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


def _handle(operation, handler):
    """Run a processor call on the JSON body and map errors to responses."""
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        logger.info(f"Processing {operation}")
        result = handler(input_data)
        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        # Validation errors from engine (missing fields, invalid values)
        logger.error(f"Validation error in {operation}: {str(e)}")
        return jsonify({
            "error": f"Validation error: {str(e)}",
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error in {operation}: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/quote", methods=["POST"])
def quote():
    """Quote an order: eligibility, conflicts, best combination and settlement"""
    return _handle("quote", processor.quote_from_dict)


@app.route("/coupons/discount", methods=["POST"])
def coupon_discount():
    return _handle("discount", processor.discount_from_dict)


@app.route("/coupons/validate", methods=["POST"])
def coupon_validate():
    return _handle("validate", processor.validate_coupon_from_dict)


@app.route("/coupons/conflicts", methods=["POST"])
def coupon_conflicts():
    return _handle("conflicts", processor.conflicts_from_dict)


@app.route("/coupons/optimize", methods=["POST"])
def coupon_optimize():
    return _handle("optimize", processor.optimize_from_dict)


@app.route("/coupons/savings", methods=["POST"])
def coupon_savings():
    return _handle("savings", processor.savings_from_dict)


@app.route("/fees/calculate", methods=["POST"])
def fees_calculate():
    """Partner payout split (processor fee + platform fee + partner amount)"""
    return _handle("fees", processor.fees_from_dict)


@app.route("/fees/application", methods=["POST"])
def fees_application():
    """Destination-charge split (platform fee only, processor fee estimated)"""
    return _handle("application_fee", processor.application_fee_from_dict)


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
