"""Command-line host for the CloudHub provider.

Implements apply/refresh/destroy for managed VPCs and read access to the
VPC data sources.
"""
