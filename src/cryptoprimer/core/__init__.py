# Thin wrappers around the `cryptography` recipes used by the routers:
# - symmetric: Fernet keys, tokens, password derived keys and rotation
# - asymmetric: RSA key pairs, PEM handling and OAEP
# - signing: RSA-PSS signatures
# - verify / encoding: helpers for the HTTP layer
