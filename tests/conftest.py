"""
Shared pytest fixtures for sports day draw tests.

Running tests:
    pytest tests/                  - full suite
    pytest tests/ -m "not slow"   - fast subset (skips the property loops)
"""
import pytest
import sys
import os
import yaml

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


SAMPLE_COMPETITIONS = {
    'competitions': [
        {
            'id': 1,
            'name': 'Boys 100m',
            'status': 'approved',
            'registrations': [
                {'class_name': 'Grade 7 Class 1', 'student_name': 'Li Lei'},
                {'class_name': 'Grade 7 Class 2', 'student_name': 'Wang Qiang'},
                {'class_name': 'Grade 8 Class 1', 'student_name': 'Zhang Wei'},
            ]
        },
        {
            'id': 2,
            'name': 'Tug of War',
            'status': 'completed',
            'registrations': [
                {'class_name': 'Grade 7 Class 1', 'team_name': 'Red'},
                {'class_name': 'Grade 7 Class 2', 'team_name': 'Blue'},
                {'class_name': 'Grade 8 Class 1', 'team_name': 'Green'},
                {'class_name': 'Grade 8 Class 2', 'team_name': 'Gold'},
                {'class_name': 'Grade 9 Class 1', 'team_name': 'Silver'},
            ]
        },
        {
            'id': 3,
            'name': 'Long Jump',
            'status': 'pending_score_review',
            'registrations': []
        },
        {
            'id': 4,
            'name': 'Chess',
            'status': 'pending',
            'registrations': [
                {'class_name': 'Grade 9 Class 2', 'student_name': 'Han Meimei'},
            ]
        },
    ]
}


@pytest.fixture
def sample_competitions():
    """Competitions in a mix of drawable and undrawable states."""
    return yaml.safe_load(yaml.dump(SAMPLE_COMPETITIONS))['competitions']


@pytest.fixture
def competitions_file(tmp_path):
    """Write the sample competitions to a YAML file."""
    path = tmp_path / "competitions.yaml"
    path.write_text(yaml.dump(SAMPLE_COMPETITIONS, allow_unicode=True), encoding='utf-8')
    return str(path)


@pytest.fixture
def temp_data_dir(tmp_path, monkeypatch, competitions_file):
    """Point the web app at a temporary data directory."""
    import app as app_module

    monkeypatch.setattr(app_module, 'DATA_DIR', str(tmp_path))
    monkeypatch.setattr(app_module, 'COMPETITIONS_FILE', competitions_file)
    return str(tmp_path)


@pytest.fixture
def client(temp_data_dir):
    """Create a test client backed by the temporary data directory."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client
