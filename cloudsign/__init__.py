"""
HTTP Signature request signing for Joyent CloudAPI and Manta.

Loads an account's RSA private key, signs the request Date with PKCS#1 v1.5
and builds the Authorization header both APIs expect.
"""

__version__ = "0.1.0"
