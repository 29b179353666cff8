import json

from slackweb import Attachment
from slackweb.utils import encode_attachments, filter_nil_parameters, slack_format_escaping, slack_timestamp


class TestFilterNilParameters:

    def test_drops_none_only(self):
        parameters = { "a": None, "b": False, "c": 0, "d": "", "e": "x" }
        assert filter_nil_parameters(parameters) == { "b": False, "c": 0, "d": "", "e": "x" }

    def test_does_not_modify_input(self):
        parameters = { "a": None }
        filter_nil_parameters(parameters)
        assert parameters == { "a": None }


class TestEncodeAttachments:

    def test_none(self):
        assert encode_attachments(None) is None

    def test_empty_list(self):
        assert encode_attachments([]) == "[]"

    def test_skips_none_entries(self):
        encoded = encode_attachments([ None, Attachment(text="hello", mrkdwn_in=[ "text" ]) ])
        assert json.loads(encoded) == [ { "text": "hello", "mrkdwn_in": [ "text" ] } ]


class TestSlackFormatEscaping:

    def test_escapes_reserved_characters(self):
        assert slack_format_escaping("<@U1> & <#C1>") == "&lt;@U1&gt; &amp; &lt;#C1&gt;"

    def test_ampersand_first(self):
        assert slack_format_escaping("&lt;") == "&amp;lt;"

    def test_none(self):
        assert slack_format_escaping(None) is None


def test_slack_timestamp_is_float_string():
    assert float(slack_timestamp()) > 1400000000
