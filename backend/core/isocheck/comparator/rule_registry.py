# comparator/rule_registry.py
"""
Registro central de comparadores por tipo de regla.
"""

from typing import Dict, Type, Optional

from ..catalog import RuleKind
from .models import RuleConfiguration
from .validators import ALL_RULES, BaseRule
from .validators.base_rule import YearProvider


class RuleRegistry:
    """
    Registro y gestión de comparadores.

    Args:
        overrides: Instancias preconfiguradas que sustituyen a las por defecto
        year_provider: Año usado por las reglas que reconstruyen fechas MMDD
            (DE 7, 12/13, 90); por defecto el año en curso
    """

    def __init__(
        self,
        overrides: Optional[Dict[RuleKind, BaseRule]] = None,
        year_provider: Optional[YearProvider] = None
    ):
        self._rules: Dict[RuleKind, Type[BaseRule]] = {}
        self._rule_instances: Dict[RuleKind, BaseRule] = {}
        self._configurations: Dict[RuleKind, RuleConfiguration] = {}
        self.year_provider = year_provider

        self.register_default_rules()

        for rule_id, instance in (overrides or {}).items():
            self.replace_rule(rule_id, instance)

    def register_default_rules(self):
        for rule_id, rule_class in ALL_RULES.items():
            self.register_rule(rule_id, rule_class)

    def register_rule(self, rule_id: RuleKind, rule_class: Type[BaseRule]):
        """Registra una nueva regla."""
        if rule_id in self._rules:
            raise ValueError(f"Regla ya registrada: {rule_id.value}")

        self._rules[rule_id] = rule_class
        self._rule_instances[rule_id] = self._instantiate(rule_class)
        self._configurations[rule_id] = RuleConfiguration(rule_id=rule_id.value, enabled=True)

    def replace_rule(self, rule_id: RuleKind, instance: BaseRule):
        """Sustituye la instancia de una regla ya registrada."""
        if rule_id not in self._rules:
            raise ValueError(f"Regla no encontrada: {rule_id.value}")
        self._rules[rule_id] = type(instance)
        self._rule_instances[rule_id] = instance

    def get_rule(self, rule_id: RuleKind) -> Optional[BaseRule]:
        if rule_id not in self._rule_instances:
            return None

        instance = self._rule_instances[rule_id]
        config = self._configurations.get(rule_id)
        if config:
            instance.enabled = config.enabled
        return instance

    def configure_rule(self, rule_id: RuleKind, enabled: bool):
        """Habilita o deshabilita un comparador; los deshabilitados se registran como SKIPPED."""
        if rule_id not in self._configurations:
            raise ValueError(f"Regla no encontrada: {rule_id.value}")
        self._configurations[rule_id].enabled = enabled

    def _instantiate(self, rule_class: Type[BaseRule]) -> BaseRule:
        if rule_class.uses_calendar_year and self.year_provider is not None:
            return rule_class(year_provider=self.year_provider)
        return rule_class()
