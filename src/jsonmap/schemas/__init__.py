from .models import MappingConfig, RuleConfig

__all__ = ["MappingConfig", "RuleConfig"]
