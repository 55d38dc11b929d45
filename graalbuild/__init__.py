"""graalbuild - native-image build step orchestrator."""

__version__ = "22.3.0"
