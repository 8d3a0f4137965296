"""
Wallet - key material and address derivation.

The signing key is loaded once at startup from PRIVATE_KEY and held for
the process lifetime.
"""
