"""Tests for model imports."""

import pytest


class TestModelImports:
    """Test that all models can be imported correctly."""

    def test_import_base_model(self):
        """Test BaseTableModel can be imported."""
        from flithub.models import BaseTableModel

        assert BaseTableModel is not None

    def test_import_provider(self):
        """Test Provider model can be imported."""
        from flithub.models import Provider

        assert Provider.__tablename__ == "providers"

    def test_import_resource(self):
        """Test Resource model can be imported."""
        from flithub.models import Resource

        assert Resource.__tablename__ == "resources"

    def test_import_user_role(self):
        """Test UserRole model can be imported."""
        from flithub.models import UserRole

        assert UserRole.__tablename__ == "user_roles"

    def test_unknown_attribute(self):
        """Test unknown names raise AttributeError."""
        import flithub.models

        with pytest.raises(AttributeError):
            flithub.models.Dataset


class TestModelRelationships:
    """Test table-level references between models."""

    def test_resource_references_provider_uuid(self):
        from flithub.models import Resource

        foreign_keys = list(Resource.__table__.c.provider_id.foreign_keys)
        assert len(foreign_keys) == 1
        assert foreign_keys[0].target_fullname == "providers.uuid"
