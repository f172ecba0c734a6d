"""
chirpy.services._shared.ports
=============================

*Ports* (hexagonal interfaces) that decouple the service layer from concrete
infrastructure.

Modules
-------
- :mod:`token_signer`:
    Defines :class:`~.TokenSigner`, the abstraction for signing and verifying
    access tokens, parametrized by a clock.

Concrete adapters live under ``chirpy.infra``.
"""

from __future__ import annotations

from .token_signer import Clock, TokenSigner, system_clock

__all__ = ["Clock", "TokenSigner", "system_clock"]
