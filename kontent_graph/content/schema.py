"""
Kontent Graph — Content Schema Constants
"""

# =====================================================
# ELEMENT TYPES (Delivery API)
# =====================================================

ELEMENT_LINKED_ITEMS = "modular_content"
ELEMENT_TAXONOMY = "taxonomy"
ELEMENT_ASSET = "asset"

# =====================================================
# ITEM KEYS
# =====================================================

ID = "id"
TYPE_NAME = "type_name"
IS_COMPONENT = "is_component"
SYSTEM = "system"

SYSTEM_FIELDS = (ID, TYPE_NAME, IS_COMPONENT, SYSTEM)

# =====================================================
# DEFAULT TYPE NAMES
# =====================================================

DEFAULT_CONTENT_ITEM_TYPE_NAME_PREFIX = ""
DEFAULT_ITEM_LINK_TYPE_NAME = "ItemLink"
DEFAULT_TAXONOMY_TYPE_NAME_PREFIX = "Taxonomy"
DEFAULT_ASSET_TYPE_NAME = "Asset"

# =====================================================
# TAXONOMY TERM NODE
# =====================================================

TERMS = "terms"
