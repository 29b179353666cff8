"""
Options used by slackweb.

These are plain tornado options, so an application can set them with
tornado.options.parse_command_line() or parse_config_file().
"""
from tornado.options import define, options

define("slack_token", default=None, type=str, help="slack api token")
define("slack_host", default="slack.com", type=str, help="host of the slack web api")
define("slack_protocol", default="https", type=str, help="http or https")
define("slack_max_tries", default=3, type=int, help="number of tries for a retriable request")
define("slack_retry_delay", default=5.0, type=float, help="seconds to wait between retries")
define("slack_request_timeout", default=20.0, type=float, help="request timeout in seconds")
