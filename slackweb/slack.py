
from .config import options
from .network import NetworkInterface
from .web_api import SlackWebAPI


class Slack(object):
    """Entry point: holds the token, the network interface and the web api

    token               the api token (default: options.slack_token)
    http_client         a tornado.httpclient.AsyncHTTPClient to use
    network_interface   use this network interface instead of creating one

    slack = Slack("xoxb-...")
    slack.api.send_message("C024BE91L", "hello", success=on_sent)
    """

    def __init__(self, token=None, http_client=None, network_interface=None):
        self.token = token if token is not None else options.slack_token
        self.network_interface = network_interface or NetworkInterface(http_client=http_client)
        self.api = SlackWebAPI.from_client(self)
