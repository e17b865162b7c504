#!/usr/bin/env python3
"""
Cover Letter Studio - Flask Backend
Fill in your background and a job description, get a tailored cover letter
"""

import os
from pathlib import Path

from flask import Flask, render_template, request, jsonify, send_file
from flask_cors import CORS
from loguru import logger

from config import GEMINI_MODEL, LOG_FOLDER, OUTPUT_FOLDER, PDF_FILENAME, STORAGE_PATH
from letter_types import LetterLength, LetterStyle
from profile_store import JsonFileProfileStore
from session_controller import CoverLetterSession, LOADING_MESSAGES

# Configure log file
os.makedirs(LOG_FOLDER, exist_ok=True)
logger.add(
    Path(LOG_FOLDER).resolve() / "app.log",
    rotation="1 day",
    compression="zip",
    retention="7 days",
    level="DEBUG",
)

app = Flask(__name__)
CORS(app)

# Configuration
app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024
app.config['OUTPUT_FOLDER'] = str(OUTPUT_FOLDER)

Path(app.config['OUTPUT_FOLDER']).mkdir(parents=True, exist_ok=True)

# One user, one form: the whole app shares a single session
letter_session = CoverLetterSession(profile_store=JsonFileProfileStore(STORAGE_PATH))


def _state_response(success: bool = True, status: int = 200, **extra):
    body = {'success': success, 'state': letter_session.snapshot()}
    body.update(extra)
    return jsonify(body), status


def _apply_form(data) -> str | None:
    """Apply posted fields; returns an error message for a bad payload."""
    if not data:
        return None
    if not isinstance(data, dict):
        return 'Expected a JSON object'
    try:
        letter_session.update(data)
    except (KeyError, ValueError) as e:
        return str(e.args[0]) if e.args else str(e)
    return None


@app.route('/')
def index():
    """Render main page"""
    return render_template(
        'index.html',
        lengths=[item.value for item in LetterLength],
        styles=[item.value for item in LetterStyle],
        loading_messages=LOADING_MESSAGES,
        state=letter_session.snapshot(),
    )


@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'ok',
        'model': GEMINI_MODEL,
        'api_key_present': letter_session.api_key_present,
    })


@app.route('/api/state', methods=['GET'])
def get_state():
    return _state_response()


@app.route('/api/fields', methods=['POST'])
def update_fields():
    """Update any of the form fields and the length/style selection"""
    error = _apply_form(request.get_json(silent=True))
    if error:
        return _state_response(False, 400, error=error)
    return _state_response()


@app.route('/api/generate', methods=['POST'])
def generate():
    """Generate a cover letter from the current form (optionally updated by this request)"""
    error = _apply_form(request.get_json(silent=True))
    if error:
        return _state_response(False, 400, error=error)

    ok = letter_session.generate()
    # Validation and service failures are part of the page state, not HTTP errors
    return _state_response(ok)


@app.route('/api/profile', methods=['POST'])
def save_profile():
    error = _apply_form(request.get_json(silent=True))
    if error:
        return _state_response(False, 400, error=error)
    letter_session.save_profile()
    return _state_response()


@app.route('/api/profile', methods=['DELETE'])
def clear_profile():
    """Clear the saved profile; the page asks the user first and sends confirm=true"""
    data = request.get_json(silent=True) or {}
    confirmed = isinstance(data, dict) and data.get('confirm') is True
    cleared = letter_session.clear_profile(confirmed=confirmed)
    return _state_response(cleared)


@app.route('/api/copy', methods=['POST'])
def copy_result():
    """Record the copy and hand the text back for navigator.clipboard"""
    copied = letter_session.copy_result()
    text = letter_session.clipboard.take() if copied else None
    return _state_response(copied, text=text)


@app.route('/api/export/pdf', methods=['GET'])
def export_pdf():
    """Render the current letter to PDF and download it"""
    file_path = Path(app.config['OUTPUT_FOLDER']).resolve() / PDF_FILENAME
    if not letter_session.export_pdf(str(file_path)):
        return _state_response(False, 409 if not letter_session.result else 500,
                               error=letter_session.error)
    return send_file(
        file_path,
        mimetype='application/pdf',
        as_attachment=True,
        download_name=PDF_FILENAME,
    )


if __name__ == '__main__':
    print("🚀 Cover Letter Studio Starting...")
    print("📝 Make sure API_KEY is set in your environment or .env file")
    print("\n🌐 Open http://localhost:5000 in your browser")
    print("\nPress Ctrl+C to stop\n")

    app.run(debug=True, host='0.0.0.0', port=5000)
