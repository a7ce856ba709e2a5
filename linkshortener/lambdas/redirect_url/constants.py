# Log events & error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
DATA_STORE_ERROR = 'DATA_STORE_ERROR'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
