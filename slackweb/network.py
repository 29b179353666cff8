"""
The tornado transport used by SlackWebAPI.

NetworkInterface turns an endpoint + params into a tornado HTTPRequest, fetches it
and hands the parsed json body to a success callback, or a SlackError to a failure
callback. Both request methods check the params before anything is sent, raising
ParameterError on the spot, then return a future the caller can also yield to get
the parsed body (or None on failure).

Some note:

Only GET requests are retried. A POST (postMessage, upload ...) is sent once, since
slack may have acted on it even if we did not get the response.
"""
import json
import uuid
import logging
import mimetypes

import tornado.gen
import tornado.httputil
import tornado.httpclient

from .config import options
from .errors import SlackError, ParameterError
from .endpoints import (SlackAPIEndpoint, DEFINITIONS, GET, POST,
        TYPE_STRING, TYPE_INT, TYPE_BOOL_STRING, TYPE_COMMA_STRING)

RETRIES_STATUS = frozenset({ 502, 503, 504, 599 })

#################### Utility functions #####################


@tornado.gen.coroutine
def _fetch_with_retries(http_client, request, max_tries=None, retries_status=None,
        retry_delay=5):
    """Fetch a request with retries

    http_client         The httpclient to use
    request             The request to fetch
    max_tries           The max number of tries to try (default: 3)
    retries_status      The status to retry on. (default: no retry)
                        (provide a set/tuple of int)
    retry_delay         Seconds to wait before the next try

    Connection errors and timeouts are treated as status 599. If the last try
    did not produce a response, None is returned.
    """
    max_tries = max_tries if max_tries is not None else 3
    retries_status = retries_status if retries_status is not None else tuple()

    tries = 0
    response = None
    while tries < max_tries:
        tries += 1
        try:
            response = yield http_client.fetch(request, raise_error=False)
            code = response.code
        except (tornado.httpclient.HTTPClientError, OSError) as e:
            logging.debug("Fail to fetch: {url}, Error: {error}".format(url=request.url, error=e))
            response = None
            code = 599

        if code in retries_status and tries < max_tries:
            logging.debug("Fail to fetch: {url}, Code: {code}, retrying ... {current_try}/{max_try}".format(
                url=request.url, code=code, current_try=tries, max_try=max_tries))
            yield tornado.gen.sleep(retry_delay)
            continue
        return response
    return response


def _check_type_and_value_for_param(key, value, param):
    param_type = param.get("type")
    if param_type == TYPE_STRING:
        value = str(value)
    elif param_type == TYPE_INT:
        if isinstance(value, bool):
            raise ParameterError("{0} is not a valid int for {1}".format(value, key))
        try:
            value = int(value)
        except (TypeError, ValueError):
            raise ParameterError("{0} cannot be converted to a int for {1}".format(value, key))
    elif param_type == TYPE_BOOL_STRING:
        if isinstance(value, str):
            value_lowered = value.lower()
            if value_lowered not in { "true", "false" }:
                raise ParameterError("{0} is not valid bool_string value for {1}".format(value, key))
            value = value_lowered
        elif isinstance(value, bool):
            value = { True: "true", False: "false" }.get(value)
        else:
            raise ParameterError("{0} is not valid bool_string value for {1}".format(value, key))
    elif param_type == TYPE_COMMA_STRING:
        if isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        elif not isinstance(value, str):
            raise ParameterError("{0} cannot be converted to a comma separated string for {1}".format(
                value, key))

    if param.get("choices") is not None and value not in param["choices"]:
        raise ParameterError("{0} is not a valid value for {1}".format(value, key))
    return value


def prepare_parameters(endpoint, parameters):
    """Check the params against the definition of the endpoint and convert them to wire values

    endpoint            a SlackAPIEndpoint
    parameters          key/value pair of params. None values are treated as absent.

    raise ParameterError if a param is unknown, a required param is missing,
    or a value cannot be converted.
    """
    params = DEFINITIONS[endpoint]["params"]
    parameters = parameters or {}

    for key in parameters:
        if key not in params:
            raise ParameterError("{0} is not a valid param for {1}".format(key, endpoint.value))

    actual_params = {}
    for key, param in params.items():
        value = parameters.get(key)
        if value is None:
            if param.get("is_required"):
                raise ParameterError("param {0} is required for {1}".format(key, endpoint.value))
            continue
        actual_params[key] = _check_type_and_value_for_param(key, value, param)
    return actual_params


def encode_multipart_formdata(fields, filename, data):
    """Build a multipart/form-data body with the fields and a single file part named "file"

    return              (content_type, body)
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    elif isinstance(data, (bytearray, memoryview)):
        data = bytes(data)
    elif not isinstance(data, bytes):
        raise ParameterError("file content must be bytes or str, not {0}".format(type(data).__name__))
    boundary = uuid.uuid4().hex.encode("ascii")
    lines = []
    for key, value in fields.items():
        lines.append(b"--" + boundary)
        lines.append('Content-Disposition: form-data; name="{0}"'.format(key).encode("utf-8"))
        lines.append(b"")
        lines.append(str(value).encode("utf-8"))

    mimetype = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    lines.append(b"--" + boundary)
    lines.append('Content-Disposition: form-data; name="file"; filename="{0}"'.format(
        filename.replace('"', '\\"')).encode("utf-8"))
    lines.append("Content-Type: {0}".format(mimetype).encode("utf-8"))
    lines.append(b"")
    lines.append(data)
    lines.append(b"--" + boundary + b"--")
    lines.append(b"")
    content_type = "multipart/form-data; boundary={0}".format(boundary.decode("ascii"))
    return content_type, b"\r\n".join(lines)

#################### Main object #################


class NetworkInterface(object):
    """
    Usage:

    network = NetworkInterface()
    body = yield network.request(SlackAPIEndpoint.AuthTest, token, None,
        success=on_success, failure=on_failure)

    Values not given to the constructor are read from tornado.options (see config.py).
    """

    def __init__(self, http_client=None, host=None, protocol=None, max_tries=None,
            retry_delay=None, request_timeout=None, retries_status=None):
        self.http_client = http_client or tornado.httpclient.AsyncHTTPClient()
        self.host = host if host is not None else options.slack_host
        self.protocol = protocol if protocol is not None else options.slack_protocol
        self.max_tries = max_tries if max_tries is not None else options.slack_max_tries
        self.retry_delay = retry_delay if retry_delay is not None else options.slack_retry_delay
        self.request_timeout = (request_timeout if request_timeout is not None
                else options.slack_request_timeout)
        self.retries_status = retries_status if retries_status is not None else RETRIES_STATUS

    def url_for(self, endpoint):
        return "{protocol}://{host}/api/{endpoint}".format(
            protocol=self.protocol, host=self.host, endpoint=endpoint.value)

    def request(self, endpoint, token, parameters, success=None, failure=None):
        """Call an endpoint of the web api

        endpoint            a SlackAPIEndpoint (or its string value, e.g. "chat.postMessage")
        token               the api token
        parameters          key/value pair of params, can be None
        success             called with the parsed json body if slack answered with ok
        failure             called with a SlackError otherwise

        raise ParameterError right away if the endpoint or the params are invalid,
        nothing is sent in that case.

        Note: this will return a future, which resolves to the parsed body or None
        """
        if not isinstance(endpoint, SlackAPIEndpoint):
            try:
                endpoint = SlackAPIEndpoint(endpoint)
            except ValueError:
                raise ParameterError("{0} is not a known endpoint".format(endpoint))
        actual_params = prepare_parameters(endpoint, parameters)
        if token is not None:
            actual_params["token"] = token
        method = DEFINITIONS[endpoint]["method"]

        request = self._create_request(endpoint, method, actual_params)
        logging.debug("Slack request: {method} {endpoint}".format(method=method, endpoint=endpoint.value))
        return self._fetch_and_handle(endpoint, request, self.max_tries if method == GET else 1,
            success, failure)

    def upload_request(self, token, data, parameters, success=None, failure=None):
        """Upload a file with files.upload

        token               the api token
        data                the content of the file, bytes (str is encoded as utf-8)
        parameters          key/value pair of params, filename is required
        success             called with the parsed json body if slack answered with ok
        failure             called with a SlackError otherwise

        raise ParameterError right away if the params or the data are invalid
        """
        endpoint = SlackAPIEndpoint.FilesUpload
        actual_params = prepare_parameters(endpoint, parameters)
        if token is not None:
            actual_params["token"] = token

        content_type, body = encode_multipart_formdata(actual_params, actual_params["filename"], data)
        request = tornado.httpclient.HTTPRequest(url=self.url_for(endpoint), method=POST,
            headers={ "Content-Type": content_type }, body=body,
            request_timeout=self.request_timeout)
        logging.debug("Slack upload: {filename} ({size} bytes)".format(
            filename=actual_params["filename"], size=len(body)))
        return self._fetch_and_handle(endpoint, request, 1, success, failure)

    @tornado.gen.coroutine
    def _fetch_and_handle(self, endpoint, request, max_tries, success, failure):
        response = yield _fetch_with_retries(self.http_client, request, max_tries=max_tries,
            retries_status=self.retries_status, retry_delay=self.retry_delay)
        return self._handle_response(endpoint, response, success, failure)

    def _create_request(self, endpoint, method, params):
        url = self.url_for(endpoint)
        _r = { "method": method, "headers": {}, "request_timeout": self.request_timeout }
        if method == GET:
            url = tornado.httputil.url_concat(url, params)
        else:
            _r["body"] = tornado.httputil.urlencode(params)
            _r["headers"]["Content-Type"] = "application/x-www-form-urlencoded"
        _r["url"] = url
        return tornado.httpclient.HTTPRequest(**_r)

    def _handle_response(self, endpoint, response, success, failure):
        body = None
        if response is None:
            error = SlackError(SlackError.CLIENT_NETWORK_ERROR)
        elif response.code != 200:
            logging.warning(("Request error:\nEndpoint: {}\nCode: {}\nBody: {}").format(
                endpoint.value, response.code, response.body))
            error = SlackError(SlackError.CLIENT_NETWORK_ERROR, status_code=response.code)
        else:
            try:
                body = json.loads(response.body.decode("utf-8"))
            except (ValueError, AttributeError):
                body = None
            if not isinstance(body, dict):
                error = SlackError(SlackError.CLIENT_JSON_ERROR, status_code=response.code)
            elif not body.get("ok"):
                error = SlackError.from_response(body, status_code=response.code)
            else:
                if success is not None:
                    success(body)
                return body

        if failure is not None:
            failure(error)
        else:
            logging.info("Slack {0} failed: {1}".format(endpoint.value, error.code))
        return None
