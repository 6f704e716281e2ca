from .token import create_fake_token_pair

__all__ = ["create_fake_token_pair"]
