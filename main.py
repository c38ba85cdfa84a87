"""Firebase Functions discovers callables in this module."""

from donorlink_functions.functions import (  # noqa: F401
    delete_user,
    get_place_details,
    google_places_autocomplete,
)
