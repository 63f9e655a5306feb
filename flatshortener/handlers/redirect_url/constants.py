# Handler outcome events / error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
VISIT_NOT_PERSISTED = 'VISIT_NOT_PERSISTED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
