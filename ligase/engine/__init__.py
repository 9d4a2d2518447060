# This file is part of Ligase.
#
# Licensed under MIT License.

"""Storage engine boundary: engine ABCs, handle cache and query facade."""

from .abc import QueryProcessor, StorageManager  # noqa: F401
from .cache import EngineCache, HandleSlot  # noqa: F401
from .facade import VariantDB  # noqa: F401
from .registry import available_engines, get_engine_factory  # noqa: F401
from .types import Call, PagingInfo, Variant, VariantQueryConfig  # noqa: F401
