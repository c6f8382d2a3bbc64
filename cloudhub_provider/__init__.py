"""CloudHub VPC provider: manages CloudHub virtual private clouds through the REST API."""

__version__ = "0.1.0"
