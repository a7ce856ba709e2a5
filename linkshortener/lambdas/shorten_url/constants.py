# Log events & error codes
INVALID_JSON = 'INVALID_JSON'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
COUNTER_UNAVAILABLE = 'COUNTER_UNAVAILABLE'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
