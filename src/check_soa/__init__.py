"""Check the SOA-serving health of a zone's authoritative name servers."""

__version__ = "0.1.0"
