#!/usr/bin/env python3
"""
NFT Filter API Server
Upload an image, pick a filter, get a PNG back for preview or download.
"""

import os
import logging
import base64
from io import BytesIO
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS

# --- Centralized Logging Configuration ---
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
    datefmt='%H:%M:%S'
)

from nft_filters.exceptions import DecodeError, EncodeError, UnknownFilterError
from nft_filters.models.filter_kind import FilterKind
from nft_filters.pipeline.apply_filter import apply_filter

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend communication

# Configuration
MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_SIZE_MB", "25")) * 1024 * 1024
DOWNLOAD_FILENAME = os.getenv("DOWNLOAD_FILENAME", "rusty_nft.png")


def _resolve_default_filter(name: str) -> str:
    """Fail at startup if DEFAULT_FILTER names no known filter."""
    return FilterKind.from_name(name).value


DEFAULT_FILTER = _resolve_default_filter(os.getenv("DEFAULT_FILTER", FilterKind.GRAYSCALE.value))

app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH

logger = logging.getLogger(__name__)


def _is_truthy(value) -> bool:
    return str(value).lower() in {"1", "true", "yes", "on"}


def _read_upload():
    """
    Pull the image bytes and filter name out of the multipart request.
    Returns (image_bytes, filter_name, error_response).
    """
    if 'image' not in request.files:
        return None, None, (jsonify({'success': False, 'message': 'No image provided'}), 400)

    file = request.files['image']
    if file.filename == '':
        return None, None, (jsonify({'success': False, 'message': 'No file selected'}), 400)

    filter_name = request.form.get('filter')
    if not filter_name:
        return None, None, (jsonify({'success': False, 'message': 'No filter selected'}), 400)

    return file.read(), filter_name, None


def _run_filter(image_bytes: bytes, filter_name: str):
    """Run the engine and map its errors onto HTTP responses."""
    try:
        return apply_filter(image_bytes, filter_name), None
    except UnknownFilterError as e:
        logger.warning(f"Unknown filter requested: {e.name!r}")
        return None, (jsonify({
            'success': False,
            'message': str(e),
            'filters': e.valid_names,
        }), 400)
    except DecodeError as e:
        logger.warning(f"Rejected upload: {e}")
        return None, (jsonify({'success': False, 'message': f'Could not read image: {e}'}), 400)
    except EncodeError as e:
        logger.error(f"Encoding failed: {e}")
        return None, (jsonify({'success': False, 'message': 'Error encoding filtered image'}), 500)


@app.route('/api/filters', methods=['GET'])
def list_filters():
    """Filters available for the dropdown, in display order."""
    return jsonify({
        'filters': [{'name': kind.value, 'label': kind.label} for kind in FilterKind],
        'default': DEFAULT_FILTER,
    })


@app.route('/api/filter', methods=['POST'])
def filter_image():
    """Apply a filter and return the PNG bytes."""
    image_bytes, filter_name, error = _read_upload()
    if error:
        return error

    png_bytes, error = _run_filter(image_bytes, filter_name)
    if error:
        return error

    download = _is_truthy(request.args.get('download', request.form.get('download', '')))
    return send_file(
        BytesIO(png_bytes),
        mimetype='image/png',
        as_attachment=download,
        download_name=DOWNLOAD_FILENAME,
    )


@app.route('/api/filter/preview', methods=['POST'])
def preview_image():
    """Apply a filter and return the PNG inline as a data URL."""
    image_bytes, filter_name, error = _read_upload()
    if error:
        return error

    png_bytes, error = _run_filter(image_bytes, filter_name)
    if error:
        return error

    base64_string = base64.b64encode(png_bytes).decode('utf-8')
    return jsonify({
        'success': True,
        'filter': filter_name,
        'image': f"data:image/png;base64,{base64_string}",
    })


@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'message': 'NFT Filter API is running',
        'filters': len(FilterKind),
    })


@app.errorhandler(413)
def too_large(e):
    """Handle file too large error."""
    return jsonify({'error': f'File too large. Maximum size is {MAX_CONTENT_LENGTH // (1024 * 1024)}MB.'}), 413


@app.errorhandler(500)
def internal_error(e):
    """Handle internal server error."""
    logger.error(f"Internal server error: {e}")
    return jsonify({'error': 'Internal server error'}), 500


if __name__ == '__main__':
    host = os.getenv("API_HOST", "127.0.0.1")
    port = int(os.getenv("API_PORT", "5000"))
    logger.info(f"Starting NFT Filter API on {host}:{port}")
    logger.info(f"Max upload size: {MAX_CONTENT_LENGTH // (1024 * 1024)}MB")
    logger.info(f"Filters: {', '.join(FilterKind.names())}")
    app.run(host=host, port=port, debug=False)
