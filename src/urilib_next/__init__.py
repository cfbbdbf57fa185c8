from .errors import DecodeError, InvalidArgument, UriError
from .uri import Uri
from .uri.multimap import QueryMultiMap
from .uri.query import Query, QueryOptions, parse, render, render_names
from .uri.source import Source
from .uri.merge import merge
from .ops import (
    add_or_update_param,
    add_or_update_params,
    query_to_map,
    remove_param,
    remove_params,
)
from .builders import UriPathBuilder, UriSlugBuilder
from .serialization import serialize
