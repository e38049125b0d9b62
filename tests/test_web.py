"""Tests for the web API."""

import shutil
import tempfile
from pathlib import Path

from catobase.core.catalog import Catalog
from catobase.core.config import AppConfig, RegistryConfig
from catobase.web.app import create_app


class TestWebApi:
    """Test the REST endpoints with the Flask test client."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.listing = self.temp_dir / "categories.txt"
        self.listing.write_text("Books\nMovies\nMusic\n")
        config = AppConfig(registry=RegistryConfig(
            path=self.temp_dir / ".catodb", categories_file=self.listing
        ))
        self.catalog = Catalog(config=config)
        self.catalog.initialize()
        self.subject = self.temp_dir / "novel.txt"
        self.subject.write_text("content")

        app = create_app({'TESTING': True, 'CATALOG': self.catalog})
        self.client = app.test_client()

    def teardown_method(self):
        """Clean up test environment."""
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_register_and_query(self):
        """Test registering over the API and finding the file."""
        response = self.client.post('/api/register', json={
            'path': str(self.subject), 'categories': ['Books', 'Movies']
        })
        assert response.status_code == 201
        assert response.get_json()['categories'] == ['Books', 'Movies']

        response = self.client.get('/api/files?pattern=novel&category=Books&category=Movies')
        assert response.status_code == 200
        data = response.get_json()
        assert data['count'] == 1
        assert data['files'][0]['path'] == str(self.subject)

        response = self.client.get('/api/files?pattern=novel&category=Music')
        assert response.get_json()['count'] == 0

    def test_register_snapshot(self):
        """Test that the snapshot flag is honored."""
        response = self.client.post('/api/register', json={
            'path': str(self.subject), 'categories': ['Books'], 'snapshot': True
        })

        assert response.status_code == 201
        assert Path(str(self.subject) + ".copy").read_text() == "content"

    def test_register_unknown_category(self):
        """Test that unknown categories are a validation error."""
        response = self.client.post('/api/register', json={
            'path': str(self.subject), 'categories': ['Games']
        })

        assert response.status_code == 400
        assert response.get_json()['message'] == "some categories do not exist"
        assert self.catalog.registry.scan() == []

    def test_register_missing_file(self):
        """Test that a missing subject is reported as 404."""
        response = self.client.post('/api/register', json={
            'path': str(self.temp_dir / "missing.txt"), 'categories': ['Books']
        })

        assert response.status_code == 404

    def test_register_missing_fields(self):
        """Test request validation."""
        response = self.client.post('/api/register', json={'path': str(self.subject)})

        assert response.status_code == 400

    def test_register_non_object_body(self):
        """Test that a JSON list body is rejected as a validation error."""
        response = self.client.post('/api/register', json=["path", "categories"])

        assert response.status_code == 400
        assert response.get_json()['message'] == "Request body must be a JSON object"
        assert self.catalog.registry.scan() == []

    def test_invalid_pattern(self):
        """Test that a malformed pattern is a client error."""
        response = self.client.get('/api/files?pattern=file(')

        assert response.status_code == 400

    def test_categories(self):
        """Test listing the reference categories."""
        response = self.client.get('/api/categories')

        assert response.get_json() == {'categories': ['Books', 'Movies', 'Music']}

    def test_unknown_endpoint(self):
        response = self.client.get('/api/nothing')

        assert response.status_code == 404
