"""Test suite for the CloudHub VPC provider.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - No network, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for adapter implementations
   - HTTP adapters run against httpx.MockTransport
   - State store runs against a temporary directory

3. fakes/: Port implementations for testing
   - In-memory implementations of AuthPort, VpcApiPort, StateStorePort
"""
