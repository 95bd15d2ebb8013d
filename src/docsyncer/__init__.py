"""docsyncer: generate executable tests from tagged documentation."""

__version__ = "0.1.0"
