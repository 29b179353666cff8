import collections

import pytest

from slackweb import SlackWebAPI

Call = collections.namedtuple("Call", ("endpoint", "token", "parameters"))
Upload = collections.namedtuple("Upload", ("token", "data", "parameters"))


class FakeNetworkInterface(object):
    """Records the requests and answers with self.response, or fails with self.error
    """

    def __init__(self):
        self.calls = []
        self.uploads = []
        self.response = { "ok": True }
        self.error = None

    def _answer(self, success, failure):
        if self.error is not None:
            if failure is not None:
                failure(self.error)
            return None
        if success is not None:
            success(self.response)
        return self.response

    def request(self, endpoint, token, parameters, success, failure):
        self.calls.append(Call(endpoint, token, parameters))
        return self._answer(success, failure)

    def upload_request(self, token, data, parameters, success, failure):
        self.uploads.append(Upload(token, data, parameters))
        return self._answer(success, failure)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def network():
    return FakeNetworkInterface()


@pytest.fixture
def api(network):
    return SlackWebAPI(network, "xoxb-test")


@pytest.fixture
def results():
    """A list and a callback that appends to it
    """
    collected = []
    return collected, collected.append
