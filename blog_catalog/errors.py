##########################################################################################
#
# Script name: errors.py
#
# Description: Exceptions raised by the content client and configuration loading.
#
##########################################################################################


# ****************************************************************************************
# Exceptions
# ****************************************************************************************


class Error(Exception):
    '''
    Base class for exceptions in this package.
    '''
    pass


class ConfigError(Error):
    '''
    Raised when the site or content settings cannot be resolved.
    '''
    pass


class ContentQueryError(Error):
    '''
    Raised when a query against the content API fails at the transport or GraphQL level.
    '''
    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        self.message = f'Content query to {endpoint} failed: {reason}'
        super().__init__(self.message)
