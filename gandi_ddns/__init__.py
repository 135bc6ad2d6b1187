"""
Gandi LiveDNS dynamic DNS synchronizer

Discovers the public IPv4/IPv6 addresses of this host and rewrites the A/AAAA
records of the configured names when they have drifted.
"""

__version__ = "0.1.0"
