"""Service layer.

Import concrete services from their subpackages, e.g.
``from chirpy.services.store.service import StoreService``. This module stays
import-free so the infrastructure adapters can depend on
``chirpy.services._shared`` without cycles.
"""
