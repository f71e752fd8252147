#!/usr/bin/env python3
"""
Flask Web Application for CPU Profile Analyzer
Provides REST API endpoints for building bottom-up and flame graph views of .cpuprofile files.
"""

from flask import Flask, request, jsonify
from werkzeug.utils import secure_filename
import os
import tempfile
from profile_analyzer import ProfileAnalyzer, ProfileFormatError
from profile_analyzer.web import prepare_results, LAYOUTS

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024
app.config['UPLOAD_FOLDER'] = tempfile.gettempdir()

ALLOWED_EXTENSIONS = {'cpuprofile', 'json'}

def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


@app.route('/api/health')
def health():
    """Liveness check."""
    return jsonify({'status': 'ok'})


@app.route('/api/analyze', methods=['POST'])
def analyze_api():
    """
    API endpoint to analyze a CPU profile.
    Accepts: multipart/form-data with fields:
      - 'file': .cpuprofile JSON file
      - 'layout': 'timeline'|'left-heavy' (optional, default: 'timeline')
      - 'root_path': directory for relative source paths (optional)
      - 'max_depth': caller levels in the bottom-up tree (optional, default: 8)
    Returns: JSON with analysis results
    """
    if 'file' not in request.files:
        return jsonify({'error': 'No file provided'}), 400

    file = request.files['file']

    if not file.filename:
        return jsonify({'error': 'No file selected'}), 400

    if not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type. Only .cpuprofile and JSON files are allowed.'}), 400

    layout = request.form.get('layout', 'timeline')
    if layout not in LAYOUTS:
        return jsonify({'error': f"Invalid layout. Expected one of: {', '.join(LAYOUTS)}"}), 400

    try:
        max_depth = int(request.form.get('max_depth', 8))
    except ValueError:
        return jsonify({'error': 'max_depth must be an integer'}), 400

    root_path = request.form.get('root_path') or None

    filename = secure_filename(file.filename)
    filepath = os.path.join(app.config['UPLOAD_FOLDER'], filename)
    file.save(filepath)

    try:
        analyzer = ProfileAnalyzer(root_path=root_path)
        analyzer.process_profile_file(filepath)
        results = prepare_results(analyzer, layout=layout, max_depth=max_depth)
        results['filename'] = filename
        return jsonify(results)

    except ProfileFormatError as e:
        return jsonify({'error': f'Malformed profile: {e}'}), 400

    except Exception as e:
        return jsonify({'error': str(e)}), 500

    finally:
        os.remove(filepath)


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5001)
