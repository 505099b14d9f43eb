"""Rule registry with auto-discovery of StatusRule subclasses."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from pathlib import Path

from status_engine.rules.base import StatusRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Discovers and manages all StatusRule implementations.

    Auto-discovers rules by scanning the rules/ package tree for any
    concrete StatusRule subclass that declares a ``rule_id``. New rules
    are added by placing a module in the appropriate subpackage.
    """

    def __init__(self) -> None:
        self._rules: dict[str, StatusRule] = {}

    def discover_rules(self) -> None:
        """Scan the rules package tree and register all StatusRule subclasses."""
        import status_engine.rules as rules_pkg

        rules_path = Path(rules_pkg.__file__).parent  # type: ignore[arg-type]
        self._scan_package(rules_pkg.__name__, str(rules_path))

    def _scan_package(self, package_name: str, package_path: str) -> None:
        """Recursively import all modules under a package and register rules."""
        for _, module_name, _ in pkgutil.walk_packages(
            [package_path], prefix=package_name + "."
        ):
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                logger.warning("Could not import rule module %s", module_name)
                continue

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, StatusRule)
                    and "rule_id" in vars(attr)
                    and not getattr(attr, "__abstractmethods__", set())
                ):
                    self.register(attr())

    def register(self, rule: StatusRule) -> None:
        """Register a rule instance by its rule_id."""
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> StatusRule | None:
        """Retrieve a rule by its rule_id."""
        return self._rules.get(rule_id)

    def get_all_rules(self) -> list[StatusRule]:
        """Return all registered rules in stable (group, rule_id) order."""
        return sorted(self._rules.values(), key=lambda r: (r.group, r.rule_id))

    @property
    def rule_ids(self) -> list[str]:
        """List all registered rule IDs."""
        return list(self._rules.keys())
