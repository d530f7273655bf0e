"""
Smoke tests for quick validation

These tests provide rapid feedback on basic functionality.
Run these first to catch obvious issues quickly.
"""
import pytest
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ============================================================================
# Import Smoke Tests
# ============================================================================

@pytest.mark.smoke
class TestImports:
    """Test that all modules can be imported without errors"""

    def test_import_package(self):
        """Test the public API is exported from the package root"""
        try:
            import synapse_register
            assert hasattr(synapse_register, 'RegistrationOrchestrator')
            assert hasattr(synapse_register, 'generate_mac')
            assert hasattr(synapse_register, 'RegistrationError')
        except ImportError as e:
            pytest.fail(f"Failed to import synapse_register: {e}")

    def test_import_admin_api(self):
        """Test importing the admin API module"""
        try:
            from synapse_register.matrix import admin_api
            assert admin_api.REGISTER_PATH == "/_synapse/admin/v1/register"
        except ImportError as e:
            pytest.fail(f"Failed to import synapse_register.matrix.admin_api: {e}")

    def test_import_cli(self):
        """Test importing the CLI entry point"""
        try:
            from synapse_register.cli import main
            assert callable(main)
        except ImportError as e:
            pytest.fail(f"Failed to import synapse_register.cli: {e}")


# ============================================================================
# Wiring Smoke Tests
# ============================================================================

@pytest.mark.smoke
class TestWiring:
    """Test that the pieces fit together without network access"""

    def test_error_hierarchy(self):
        from synapse_register import ConfigError, DecodeError, ProtocolError, RegistrationError, TransportError

        for error_cls in (ConfigError, DecodeError, ProtocolError, TransportError):
            assert issubclass(error_cls, RegistrationError)

        categories = {cls.category for cls in (ConfigError, DecodeError, ProtocolError, TransportError)}
        assert categories == {"config", "decode", "protocol", "transport"}

    def test_orchestrator_starts_idle(self, registration_config):
        from synapse_register import RegistrationOrchestrator, RegistrationState

        orchestrator = RegistrationOrchestrator(registration_config)
        assert orchestrator.state is RegistrationState.IDLE
