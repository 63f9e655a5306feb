# Handler outcome events / error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
INVALID_ALIAS = 'INVALID_ALIAS'
ALIAS_TAKEN = 'ALIAS_TAKEN'
STORE_WRITE_FAILED = 'STORE_WRITE_FAILED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
