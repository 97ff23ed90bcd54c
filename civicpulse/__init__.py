"""CivicPulse — civic persona classification and alerting engine."""

__version__ = "1.0.0"
