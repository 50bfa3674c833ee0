from flask import Flask, request, jsonify
from flask_cors import CORS
from incentive_engine import IncentiveProcessor
from incentive_engine.service import handle_request
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the dashboard calls the API from the browser)
CORS(app)

# Initialize the incentive processor
processor = IncentiveProcessor()


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Sales Incentive Calculator API",
        "version": "1.0",
        "endpoints": {
            "calculate_incentives": "/calculate_incentives [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/calculate_incentives", methods=["POST"])
def calculate_incentives():
    """
    Calculate the incentive overview for the requesting user
    """
    status_code, body = handle_request(processor, request.get_data(as_text=True))
    return jsonify(body), status_code


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
