"""
Kontent Graph — Content Node Validator

Purpose:
- Validate node constructor output before it reaches the graph store
- Reject nodes without a usable id / type name
- Reject field groups of the wrong kind
- Reject a field name classified into two groups
"""

from kontent_graph.content.models import AssetField, LinkedItemField, TaxonomyField
from kontent_graph.errors import InvalidContentNodeError
from kontent_graph.utils.logging_utils import get_component_logger


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("NodeValidator", component="source")


class NodeValidator:

    REQUIRED_ITEM_FIELDS = ("id", "type_name")

    # =====================================================
    # MAIN VALIDATION ENTRY
    # =====================================================

    def validate_node(self, node) -> dict:

        errors = []
        warnings = []

        self._validate_item(node.item, errors)
        self._validate_field_groups(node, errors)
        self._validate_field_names(node, errors, warnings)

        return self._finalize(errors, warnings)

    def ensure_valid(self, node):

        result = self.validate_node(node)

        if not result["valid"]:
            item_id = node.item.get("id") if isinstance(node.item, dict) else None
            raise InvalidContentNodeError(item_id, result["errors"])

        for warning in result["warnings"]:
            logger.warning(warning)

        return node

    # =====================================================
    # ITEM FIELDS
    # =====================================================

    def _validate_item(self, item, errors):

        if not isinstance(item, dict):
            errors.append("item must be a dict")
            return

        for key in self.REQUIRED_ITEM_FIELDS:
            value = item.get(key)
            if not value:
                errors.append(f"Missing required item field: {key}")
            elif not isinstance(value, str):
                errors.append(f"{key} must be string")

    # =====================================================
    # FIELD GROUP TYPES
    # =====================================================

    def _validate_field_groups(self, node, errors):

        groups = (
            ("linked_item_fields", LinkedItemField),
            ("taxonomy_fields", TaxonomyField),
            ("asset_fields", AssetField),
        )

        for group_name, field_type in groups:
            group = getattr(node, group_name)

            if not isinstance(group, list):
                errors.append(f"{group_name} must be a list")
                continue

            for entry in group:
                if not isinstance(entry, field_type):
                    errors.append(
                        f"{group_name} entries must be {field_type.__name__}, "
                        f"got {type(entry).__name__}"
                    )
                elif not entry.field_name:
                    errors.append(f"{group_name} entry without field_name")

    # =====================================================
    # FIELD NAME CONSISTENCY
    # =====================================================

    def _validate_field_names(self, node, errors, warnings):

        groups = (node.linked_item_fields, node.taxonomy_fields, node.asset_fields)

        if not all(isinstance(group, list) for group in groups):
            return

        seen = set()

        for group in groups:
            for entry in group:
                field_name = getattr(entry, "field_name", None)
                if not field_name:
                    continue

                if field_name in seen:
                    errors.append(f"Field '{field_name}' is classified more than once")
                seen.add(field_name)

                if field_name in self.REQUIRED_ITEM_FIELDS:
                    errors.append(f"Field '{field_name}' shadows a reserved item field")

                if isinstance(node.item, dict) and field_name not in node.item:
                    warnings.append(
                        f"Field '{field_name}' has no value on item {node.item.get('id')}"
                    )

    # =====================================================
    # FINALIZE RESULT
    # =====================================================

    def _finalize(self, errors, warnings) -> dict:

        return {
            "valid": len(errors) == 0,
            "errors": errors,
            "warnings": warnings
        }
