LAMBDA_NAME = 'shorten_url'

# Events / error codes
INVALID_JSON = 'INVALID_JSON'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_TARGET_URL = 'INVALID_TARGET_URL'
SHORTCODE_SPACE_EXHAUSTED = 'SHORTCODE_SPACE_EXHAUSTED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
