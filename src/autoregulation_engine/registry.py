"""Rule registry with auto-discovery of AutoregulationRule subclasses."""

from __future__ import annotations

import importlib
import pkgutil

from autoregulation_engine.rules.base import AutoregulationRule


class RuleRegistry:
    """Discovers and manages all AutoregulationRule implementations.

    Auto-discovers rules by scanning the rules/ package tree for any
    concrete subclasses of AutoregulationRule. New rules are added simply
    by placing a .py file in the appropriate subdirectory.
    """

    def __init__(self) -> None:
        self._rules: dict[str, AutoregulationRule] = {}

    def discover_rules(self) -> None:
        """Scan the rules package tree and register all AutoregulationRule subclasses."""
        import autoregulation_engine.rules as rules_pkg

        self._scan_package(rules_pkg.__name__, list(rules_pkg.__path__))

    def _scan_package(self, package_name: str, package_path: list[str]) -> None:
        """Recursively import all modules under a package and register rules."""
        for _, module_name, _ in pkgutil.walk_packages(package_path, prefix=package_name + "."):
            module = importlib.import_module(module_name)

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, AutoregulationRule)
                    and attr is not AutoregulationRule
                    and not getattr(attr, "__abstractmethods__", set())
                ):
                    self.register(attr())

    def register(self, rule: AutoregulationRule) -> None:
        """Register a rule instance by its rule_id.

        Re-registering the same rule class replaces the instance.

        Raises:
            ValueError: If a different rule class already owns the rule_id.
        """
        existing = self._rules.get(rule.rule_id)
        if existing is not None and type(existing) is not type(rule):
            raise ValueError(
                f"rule_id {rule.rule_id!r} already registered by {type(existing).__name__}"
            )
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> AutoregulationRule | None:
        """Retrieve a rule by its rule_id."""
        return self._rules.get(rule_id)

    def get_all_rules(self) -> list[AutoregulationRule]:
        """Return all registered rules in evaluation order."""
        return sorted(self._rules.values(), key=lambda r: r.order)

    @property
    def rule_ids(self) -> list[str]:
        """List all registered rule IDs."""
        return list(self._rules.keys())
