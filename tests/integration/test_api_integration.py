"""Integration tests for the Flask API and the command line entry point."""

import io
import json
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from app import app
import analyze_profile


@pytest.fixture
def client(tmp_path):
    """Create a test client for the Flask app."""
    app.config['TESTING'] = True
    app.config['UPLOAD_FOLDER'] = str(tmp_path)
    with app.test_client() as client:
        yield client


def upload(client, profile, filename='app.cpuprofile', **fields):
    data = {'file': (io.BytesIO(json.dumps(profile).encode()), filename)}
    data.update(fields)
    return client.post('/api/analyze', data=data, content_type='multipart/form-data')


class TestAnalyzeEndpoint:
    """Tests for POST /api/analyze."""

    def test_analyze_success(self, client, app_profile, tmp_path):
        response = upload(client, app_profile, root_path='/home/dev/project')

        assert response.status_code == 200
        data = response.get_json()
        assert data['filename'] == 'app.cpuprofile'
        assert data['summary']['node_count'] == 5
        assert data['flame']['layout'] == 'timeline'
        assert data['locations'][0]['src']['relativePath'] == 'src/main.js'
        # Uploaded file is cleaned up
        assert list(tmp_path.iterdir()) == []

    def test_left_heavy_layout(self, client, app_profile):
        response = upload(client, app_profile, layout='left-heavy')

        assert response.status_code == 200
        assert response.get_json()['flame']['columns'][2]['rows'] == [0, 0]

    def test_missing_file(self, client):
        response = client.post('/api/analyze', data={}, content_type='multipart/form-data')

        assert response.status_code == 400
        assert response.get_json()['error'] == 'No file provided'

    def test_wrong_extension(self, client, app_profile):
        response = upload(client, app_profile, filename='profile.txt')

        assert response.status_code == 400
        assert 'Invalid file type' in response.get_json()['error']

    def test_invalid_layout(self, client, app_profile):
        response = upload(client, app_profile, layout='sideways')

        assert response.status_code == 400

    def test_malformed_profile(self, client):
        response = upload(client, {'startTime': 0, 'endTime': 1})

        assert response.status_code == 400
        assert response.get_json()['error'].startswith('Malformed profile')

    def test_aborted_capture(self, client, chain_profile):
        del chain_profile['timeDeltas']
        response = upload(client, chain_profile)

        assert response.status_code == 200
        assert response.get_json()['flame']['columns'] == []

    def test_malformed_annotations(self, client, chain_profile):
        chain_profile['$vscode'] = 'broken'
        response = upload(client, chain_profile)

        assert response.status_code == 400
        assert response.get_json()['error'].startswith('Malformed profile')

    def test_health(self, client):
        assert client.get('/api/health').get_json() == {'status': 'ok'}


class TestCommandLine:
    """Tests for analyze_profile.main()."""

    def test_prints_top_locations(self, app_profile, temp_json_file, monkeypatch, capsys):
        path = temp_json_file(app_profile)
        monkeypatch.setattr(sys, 'argv', ['analyze_profile.py', path, '--top', '2',
                                          '--root-path', '/home/dev/project'])

        analyze_profile.main()

        output = capsys.readouterr().out
        assert 'work  src/main.js:11' in output
        assert 'Analysis complete' in output

    def test_missing_file_exits(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(sys, 'argv', ['analyze_profile.py', str(tmp_path / 'missing.cpuprofile')])

        with pytest.raises(SystemExit) as exc:
            analyze_profile.main()

        assert exc.value.code == 1
        assert 'not found' in capsys.readouterr().out
