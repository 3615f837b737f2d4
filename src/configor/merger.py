"""Config merger for layering decoded configuration documents."""
import copy
import logging
from enum import Enum
from typing import Any, Dict, List


logger = logging.getLogger(__name__)


class ListMergeStrategy(Enum):
    """Strategy for merging list values."""
    REPLACE = "replace"      # Override list completely
    EXTEND = "extend"        # Append override elements to base list
    PREPEND = "prepend"      # Prepend override elements to base list


class ConfigMerger:
    """Deep merges configuration dictionaries.

    Merge rules:
    - Dicts: Merged recursively
    - Lists: Merged based on ListMergeStrategy (replaced by default)
    - Scalars (int, str, bool, etc.): Overridden by value

    Example:
        base = {"servers": [{"port": 80}], "db": {"host": "localhost", "port": 5432}}
        override = {"servers": [{"port": 8080}], "db": {"host": "db.internal"}}

        With REPLACE strategy:
            result = {"servers": [{"port": 8080}], "db": {"host": "db.internal", "port": 5432}}
    """

    def __init__(self, list_strategy: ListMergeStrategy = ListMergeStrategy.REPLACE):
        """Initialize config merger.

        Args:
            list_strategy: Strategy for merging lists
        """
        self.list_strategy = list_strategy

    def merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge override into base config.

        Args:
            base: Base configuration (lower priority)
            override: Override configuration (higher priority)

        Returns:
            Merged configuration (new dict, inputs not modified)
        """
        result = copy.deepcopy(base) if base else {}

        for key, override_value in (override or {}).items():
            base_value = result.get(key)
            if isinstance(base_value, dict) and isinstance(override_value, dict):
                result[key] = self.merge(base_value, override_value)
            elif isinstance(base_value, list) and isinstance(override_value, list):
                result[key] = self._merge_lists(base_value, override_value)
            else:
                # Scalar or type mismatch: override
                result[key] = copy.deepcopy(override_value)

        return result

    def _merge_lists(self, base_list: List[Any], override_list: List[Any]) -> List[Any]:
        """Merge two lists based on configured strategy."""
        if self.list_strategy == ListMergeStrategy.REPLACE:
            return copy.deepcopy(override_list)
        elif self.list_strategy == ListMergeStrategy.EXTEND:
            return base_list + copy.deepcopy(override_list)
        elif self.list_strategy == ListMergeStrategy.PREPEND:
            return copy.deepcopy(override_list) + base_list
        else:
            raise ValueError(f"Unknown list strategy: {self.list_strategy}")

    def merge_multiple(
        self,
        *configs: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Merge multiple configs in order (left to right, right wins).

        Args:
            *configs: Multiple configs to merge (merged left to right)

        Returns:
            Final merged config
        """
        result: Dict[str, Any] = {}

        for config in configs:
            result = self.merge(result, config)

        logger.debug(
            "Configs merged",
            extra={
                "config_count": len(configs),
                "result_keys": len(result),
                "list_strategy": self.list_strategy.value,
            },
        )
        return result


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Convenience function for deep merging configs."""
    merger = ConfigMerger()
    return merger.merge(base, override)
