from .config_manager import AppConfig, CredentialResolver, usable_credential

__all__ = ["AppConfig", "CredentialResolver", "usable_credential"]
