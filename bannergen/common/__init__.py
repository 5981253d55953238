# Common utilities
from .config_loader import load_config, load_settings, merge_settings
from .csv_utils import MANIFEST_FIELDNAMES, write_csv
from .errors import (
    BannerGenError,
    EmptyAfterFiltering,
    FeedError,
    FeedParseError,
    FetchExhausted,
    ImageLoadFailure,
    InvalidContent,
    NoProductsFound,
)
from .log_config import setup_logging
from .text_utils import (
    encode_uri_component,
    first_int,
    format_price,
    parse_price,
    sanitize_filename,
    strip_query,
)
