"""SHACL validation."""

from semops.validation.shacl import ShaclValidator, build_validator

__all__ = ["ShaclValidator", "build_validator"]
