"""ComplyScan — website privacy and legal-compliance scanner."""

__version__ = "1.0.0"
