
#################### Exceptions #####################
class SlackError(Exception):
    """An error reported while talking to the slack web api

    code                the slack error string, e.g. "channel_not_found", or one of the
                        client side codes below
    status_code         the http status code of the response, if there was one
    response            the parsed response body, if there was one
    """

    CLIENT_NETWORK_ERROR = "client_network_error"
    CLIENT_JSON_ERROR = "client_json_error"
    UNKNOWN_ERROR = "unknown_error"

    def __init__(self, code, status_code=None, response=None):
        super().__init__(code)
        self.code = code
        self.status_code = status_code
        self.response = response

    @classmethod
    def from_response(cls, response, status_code=None):
        code = response.get("error") if isinstance(response, dict) else None
        return cls(code or cls.UNKNOWN_ERROR, status_code=status_code, response=response)

    def __repr__(self):
        return "{0}({1!r})".format(type(self).__name__, self.code)


class ParameterError(SlackError):
    """Raised before any request is made when the parameters do not match the endpoint
    """

    def __init__(self, message):
        super().__init__("invalid_parameters")
        self.message = message

    def __str__(self):
        return self.message
