from tessera.application.context.principal import Principal

__all__ = ["Principal"]
