"""HTTP Signature request signing for CloudAPI and Manta."""
