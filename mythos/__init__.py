"""MYTHOS-CAN canonical encoding, content hashing and conformance vector pack checking."""

__version__ = "0.2.0"