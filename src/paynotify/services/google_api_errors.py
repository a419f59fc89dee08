"""
Exceptions a Google API client call can raise.
"""

import httplib2
from google.auth.exceptions import TransportError
from googleapiclient.errors import HttpError

# HttpError carries an API response. The others are network failures
# raised before any response arrives.
GOOGLE_API_ERRORS = (HttpError, TransportError, httplib2.HttpLib2Error, OSError)
