# Handler outcome events / error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
