from .password import BcryptPasswordHasher

__all__ = ["BcryptPasswordHasher"]
