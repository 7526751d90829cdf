"""Decorators for client/mixins methods"""

from .utils import attribute_required


steam_id_required = attribute_required(
    "steam_id",
    "You must login or import login cookies before use this method",
)
