import io
import json
import urllib.parse

import pytest
import tornado.concurrent
import tornado.httpclient
import tornado.ioloop
import tornado.testing

from slackweb import (Attachment, NetworkInterface, ParameterError, ParseMode, Presence, Slack,
        SlackAPIEndpoint, SlackError, SlackWebAPI)
from slackweb.network import encode_multipart_formdata, prepare_parameters


class FakeHTTPClient(object):
    """Answers fetch() with the queued (code, body) pairs, or raises a queued exception
    """

    def __init__(self, *answers):
        self.answers = list(answers)
        self.requests = []

    def fetch(self, request, raise_error=True):
        self.requests.append(request)
        answer = self.answers.pop(0)
        future = tornado.concurrent.Future()
        if isinstance(answer, Exception):
            future.set_exception(answer)
        else:
            code, body = answer
            if isinstance(body, dict):
                body = json.dumps(body)
            if isinstance(body, str):
                body = body.encode("utf-8")
            future.set_result(tornado.httpclient.HTTPResponse(request, code, buffer=io.BytesIO(body)))
        return future


def _network(*answers):
    return NetworkInterface(http_client=FakeHTTPClient(*answers), host="slack.test", protocol="https",
        max_tries=3, retry_delay=0, request_timeout=5)


class TestPrepareParameters:

    def test_converts_bool_int_and_lists(self):
        params = prepare_parameters(SlackAPIEndpoint.ChannelsHistory, { "channel": "C1", "inclusive": True,
                "unreads": False, "count": 100 })
        assert params == { "channel": "C1", "inclusive": "true", "unreads": "false", "count": 100 }
        params = prepare_parameters(SlackAPIEndpoint.DNDTeamInfo, { "users": [ "U1", "U2" ] })
        assert params == { "users": "U1,U2" }

    def test_none_is_absent(self):
        assert prepare_parameters(SlackAPIEndpoint.DNDInfo, { "user": None }) == {}
        assert prepare_parameters(SlackAPIEndpoint.AuthTest, None) == {}

    def test_missing_required(self):
        with pytest.raises(ParameterError):
            prepare_parameters(SlackAPIEndpoint.ChannelsInfo, {})

    def test_unknown_param(self):
        with pytest.raises(ParameterError) as info:
            prepare_parameters(SlackAPIEndpoint.ChatPostMessage, { "channel": "C1", "unfurlMedia": True })
        assert "unfurlMedia" in str(info.value)

    def test_invalid_choice(self):
        with pytest.raises(ParameterError):
            prepare_parameters(SlackAPIEndpoint.UsersSetPresence, { "presence": "busy" })

    @pytest.mark.parametrize("key,value", [ ("inclusive", "yes"), ("inclusive", 1), ("count", "many"),
            ("count", True) ])
    def test_invalid_values(self, key, value):
        with pytest.raises(ParameterError):
            prepare_parameters(SlackAPIEndpoint.ChannelsHistory, { "channel": "C1", key: value })


class TestMultipart:

    def test_body_has_fields_and_file(self):
        content_type, body = encode_multipart_formdata({ "filename": "a.txt", "token": "t" }, "a.txt", b"abc")
        boundary = content_type.split("boundary=")[1].encode("ascii")
        assert content_type.startswith("multipart/form-data; boundary=")
        assert body.endswith(b"--" + boundary + b"--\r\n")
        assert b'Content-Disposition: form-data; name="token"\r\n\r\nt\r\n' in body
        assert b'name="file"; filename="a.txt"\r\nContent-Type: text/plain\r\n\r\nabc\r\n' in body

    def test_str_data_is_utf8(self):
        _, body = encode_multipart_formdata({}, "a.txt", "é")
        assert "é".encode("utf-8") in body

    @pytest.mark.parametrize("data", [ None, 42, [ b"a" ] ])
    def test_rejects_data_that_is_not_bytes_or_str(self, data):
        with pytest.raises(ParameterError):
            encode_multipart_formdata({}, "a.txt", data)


class NetworkInterfaceTest(tornado.testing.AsyncTestCase):

    @tornado.testing.gen_test
    def test_get_request_with_query_and_token(self):
        network = _network((200, { "ok": True, "channels": [] }))
        results = []
        body = yield network.request(SlackAPIEndpoint.ChannelsList, "xoxb-1", { "exclude_archived": True },
            results.append, None)
        assert body == { "ok": True, "channels": [] }
        assert results == [ body ]

        request = network.http_client.requests[0]
        url = urllib.parse.urlsplit(request.url)
        assert request.method == "GET"
        assert url.netloc == "slack.test"
        assert url.path == "/api/channels.list"
        assert urllib.parse.parse_qs(url.query) == { "exclude_archived": [ "true" ], "token": [ "xoxb-1" ] }

    @tornado.testing.gen_test
    def test_post_request_with_form_body(self):
        network = _network((200, { "ok": True, "ts": "1.0" }))
        yield network.request("chat.postMessage", "xoxb-1", { "channel": "C1", "text": "a b" })
        request = network.http_client.requests[0]
        assert request.method == "POST"
        assert request.url == "https://slack.test/api/chat.postMessage"
        assert urllib.parse.parse_qs(request.body.decode("utf-8")) == {
            "channel": [ "C1" ], "text": [ "a b" ], "token": [ "xoxb-1" ] }

    @tornado.testing.gen_test
    def test_slack_error_goes_to_failure(self):
        network = _network((200, { "ok": False, "error": "channel_not_found" }))
        successes, failures = [], []
        body = yield network.request(SlackAPIEndpoint.ChannelsInfo, "t", { "channel": "C1" },
            successes.append, failures.append)
        assert body is None
        assert successes == []
        assert failures[0].code == "channel_not_found"
        assert failures[0].response == { "ok": False, "error": "channel_not_found" }

    @tornado.testing.gen_test
    def test_not_ok_without_error_is_unknown(self):
        network = _network((200, { "ok": False }))
        failures = []
        yield network.request(SlackAPIEndpoint.AuthTest, "t", None, None, failures.append)
        assert failures[0].code == SlackError.UNKNOWN_ERROR

    @tornado.testing.gen_test
    def test_invalid_json(self):
        network = _network((200, "<html>"))
        failures = []
        yield network.request(SlackAPIEndpoint.AuthTest, "t", None, None, failures.append)
        assert failures[0].code == SlackError.CLIENT_JSON_ERROR

    @tornado.testing.gen_test
    def test_http_error_status(self):
        network = _network((404, "not found"))
        failures = []
        yield network.request(SlackAPIEndpoint.AuthTest, "t", None, None, failures.append)
        assert failures[0].code == SlackError.CLIENT_NETWORK_ERROR
        assert failures[0].status_code == 404

    @tornado.testing.gen_test
    def test_get_is_retried(self):
        network = _network((503, ""), ConnectionRefusedError(), (200, { "ok": True }))
        body = yield network.request(SlackAPIEndpoint.AuthTest, "t", None)
        assert body == { "ok": True }
        assert len(network.http_client.requests) == 3

    @tornado.testing.gen_test
    def test_gives_up_after_max_tries(self):
        network = _network((503, ""), (503, ""), (503, ""))
        failures = []
        yield network.request(SlackAPIEndpoint.AuthTest, "t", None, None, failures.append)
        assert len(network.http_client.requests) == 3
        assert failures[0].status_code == 503

    @tornado.testing.gen_test
    def test_post_is_not_retried(self):
        network = _network(ConnectionRefusedError(), (200, { "ok": True }))
        failures = []
        yield network.request(SlackAPIEndpoint.ChatDelete, "t", { "channel": "C1", "ts": "1.0" },
            None, failures.append)
        assert len(network.http_client.requests) == 1
        assert failures[0].code == SlackError.CLIENT_NETWORK_ERROR
        assert failures[0].status_code is None

    @tornado.testing.gen_test
    def test_upload_request(self):
        network = _network((200, { "ok": True, "file": { "id": "F1" } }))
        results = []
        yield network.upload_request("t", b"hello", { "filename": "hello.txt", "channels": "C1" },
            results.append, None)
        request = network.http_client.requests[0]
        assert request.url == "https://slack.test/api/files.upload"
        assert request.method == "POST"
        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b"hello" in request.body
        assert results[0]["file"] == { "id": "F1" }



class TestInvalidRequestsRaiseRightAway:

    def test_missing_required_param(self):
        network = _network()
        with pytest.raises(ParameterError):
            network.request(SlackAPIEndpoint.UsersInfo, "t", {})
        assert network.http_client.requests == []

    def test_unknown_endpoint_string(self):
        network = _network()
        with pytest.raises(ParameterError) as info:
            network.request("chat.shout", "t", {})
        assert "chat.shout" in str(info.value)
        assert network.http_client.requests == []

    def test_upload_without_data(self):
        network = _network()
        with pytest.raises(ParameterError):
            network.upload_request("t", None, { "filename": "a.txt" })
        assert network.http_client.requests == []

    def test_web_api_call_with_callbacks(self):
        network = _network()
        failures = []
        slack = Slack("t", network_interface=network)
        with pytest.raises(ParameterError):
            slack.api.user_info(None, failure=failures.append)
        assert failures == []
        assert network.http_client.requests == []


# Every public SlackWebAPI method, with arguments that fill as many params as it has.
WEB_API_CALLS = [
    ("rtm_start", (), { "simple_latest": True, "no_unreads": False, "mpim_aware": True }),
    ("api_test", (), { "error": "my_error", "foo": "bar" }),
    ("authentication_test", (), {}),
    ("channel_history", ("C1",), { "latest": "2.0", "oldest": "1.0", "inclusive": True, "count": 5,
        "unreads": True }),
    ("channel_info", ("C1",), {}),
    ("channels_list", (), { "exclude_archived": True }),
    ("mark_channel", ("C1", "1.0"), {}),
    ("set_channel_purpose", ("C1", "purpose"), {}),
    ("set_channel_topic", ("C1", "topic"), {}),
    ("delete_message", ("C1", "1.0"), {}),
    ("send_message", ("C1", "hi"), { "username": "bot", "as_user": False, "parse": ParseMode.FULL,
        "link_names": True, "attachments": [ Attachment(title="t") ], "unfurl_links": True,
        "unfurl_media": False, "icon_url": "http://x/i.png", "icon_emoji": ":ghost:", "thread_ts": "1.0" }),
    ("update_message", ("C1", "1.0", "hi"), { "attachments": [ Attachment(title="t") ],
        "parse": ParseMode.FULL, "link_names": True }),
    ("dnd_info", (), { "user": "U1" }),
    ("dnd_team_info", (), { "users": [ "U1", "U2" ] }),
    ("emoji_list", (), {}),
    ("delete_file", ("F1",), {}),
    ("upload_file", (b"abc", "a.txt"), { "filetype": "text", "title": "A", "initial_comment": "look",
        "channels": [ "C1", "C2" ] }),
    ("add_file_comment", ("F1", "comment"), {}),
    ("edit_file_comment", ("F1", "Fc1", "comment"), {}),
    ("delete_file_comment", ("F1", "Fc1"), {}),
    ("close_group", ("G1",), {}),
    ("group_history", ("G1",), {}),
    ("group_info", ("G1",), {}),
    ("groups_list", (), {}),
    ("mark_group", ("G1", "1.0"), {}),
    ("open_group", ("G1",), {}),
    ("set_group_purpose", ("G1", "purpose"), {}),
    ("set_group_topic", ("G1", "topic"), {}),
    ("close_im", ("D1",), {}),
    ("im_history", ("D1",), {}),
    ("ims_list", (), {}),
    ("mark_im", ("D1", "1.0"), {}),
    ("open_im", ("U1",), {}),
    ("close_mpim", ("G1",), {}),
    ("mpim_history", ("G1",), {}),
    ("mpims_list", (), {}),
    ("mark_mpim", ("G1", "1.0"), {}),
    ("open_mpim", ([ "U1", "U2" ],), {}),
    ("pin_item", ("C1",), { "file": "F1", "file_comment": "Fc1", "timestamp": "1.0" }),
    ("unpin_item", ("C1",), { "file": "F1", "file_comment": "Fc1", "timestamp": "1.0" }),
    ("add_reaction", ("thumbsup",), { "file": "F1", "file_comment": "Fc1", "channel": "C1",
        "timestamp": "1.0" }),
    ("remove_reaction", ("thumbsup",), { "file": "F1", "file_comment": "Fc1", "channel": "C1",
        "timestamp": "1.0" }),
    ("get_reactions", (), { "file": "F1", "file_comment": "Fc1", "channel": "C1", "timestamp": "1.0",
        "full": True }),
    ("reactions_list", (), { "user": "U1", "full": True, "count": 10, "page": 2 }),
    ("add_star", (), { "file": "F1", "file_comment": "Fc1", "channel": "C1", "timestamp": "1.0" }),
    ("remove_star", (), { "file": "F1", "file_comment": "Fc1", "channel": "C1", "timestamp": "1.0" }),
    ("team_info", (), {}),
    ("user_presence", ("U1",), {}),
    ("user_info", ("U1",), {}),
    ("users_list", (), { "include_presence": True }),
    ("set_user_active", (), {}),
    ("set_user_presence", (Presence.AUTO,), {}),
]


class TestWebAPIThroughNetwork:

    def test_every_method_is_listed(self):
        public = { name for name in dir(SlackWebAPI)
                if not name.startswith("_") and name != "from_client" }
        assert public == { name for name, _, _ in WEB_API_CALLS }

    @pytest.mark.parametrize("name,args,kwargs", WEB_API_CALLS, ids=[ c[0] for c in WEB_API_CALLS ])
    def test_params_match_endpoint_definitions(self, name, args, kwargs):
        network = _network((200, { "ok": True }))
        api = Slack("xoxb-1", network_interface=network).api
        results = []
        io_loop = tornado.ioloop.IOLoop()
        try:
            body = io_loop.run_sync(lambda: getattr(api, name)(*args, success=results.append, **kwargs))
        finally:
            io_loop.close()
        assert body == { "ok": True }
        assert len(results) == 1
        assert len(network.http_client.requests) == 1
