from .pyjwt_signer import JWTTokenSigner

__all__ = ["JWTTokenSigner"]
