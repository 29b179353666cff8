"""
SlackWebAPI: one method per endpoint of the slack web api.

Every method builds its params, drops the ones that are None and hands them to the
network interface with two callbacks. On success, `success` is called with the
parsed result of that endpoint (a model, a list, a bool ...). On failure, `failure`
is called with whatever SlackError the network interface produced. Both callbacks
are optional.

The return value is the one of the network interface, which for NetworkInterface
is a future that can be yielded.
"""
import enum

from .endpoints import SlackAPIEndpoint
from .models import Channel, Comment, DoNotDisturbStatus, File, History, User
from .utils import encode_attachments, filter_nil_parameters, slack_format_escaping, slack_timestamp


class InfoType(enum.Enum):
    PURPOSE = "purpose"
    TOPIC = "topic"


class ParseMode(enum.Enum):
    FULL = "full"
    NONE = "none"


class Presence(enum.Enum):
    AUTO = "auto"
    AWAY = "away"


class ChannelType(enum.Enum):
    CHANNEL = "channel"
    GROUP = "group"
    IM = "im"


def _enum_value(value):
    return value.value if isinstance(value, enum.Enum) else value


def _get(response, key, expected_type):
    value = response.get(key)
    return value if isinstance(value, expected_type) else None


def _reply(success, parse):
    """Wrap the success callback so that it is called with parse(response)
    """
    def on_success(response):
        if success is not None:
            success(parse(response))
    return on_success


def _ok(response):
    return True


class SlackWebAPI(object):

    def __init__(self, network_interface, token):
        self.network_interface = network_interface
        self.token = token

    @classmethod
    def from_client(cls, slack):
        """Create from a Slack object, sharing its network interface and token
        """
        return cls(network_interface=slack.network_interface, token=slack.token)

    def _request(self, endpoint, parameters, on_success, failure):
        return self.network_interface.request(endpoint, self.token, parameters, on_success, failure)

    #################### RTM #####################
    def rtm_start(self, simple_latest=None, no_unreads=None, mpim_aware=None, success=None, failure=None):
        parameters = { "simple_latest": simple_latest, "no_unreads": no_unreads, "mpim_aware": mpim_aware }
        return self._request(SlackAPIEndpoint.RTMStart, filter_nil_parameters(parameters),
            _reply(success, lambda response: response), failure)

    #################### API / Auth Test #####################
    def api_test(self, error=None, foo=None, success=None, failure=None):
        """Call api.test. Slack echoes the params back in "args".

        error               if set, slack fails the call with this error
        """
        parameters = { "error": error, "foo": foo }
        return self._request(SlackAPIEndpoint.APITest, filter_nil_parameters(parameters),
            _reply(success, lambda response: _get(response, "args", dict)), failure)

    def authentication_test(self, success=None, failure=None):
        return self._request(SlackAPIEndpoint.AuthTest, None, _reply(success, _ok), failure)

    #################### Channels #####################
    def channel_history(self, id, latest=None, oldest="0", inclusive=False, count=100, unreads=False,
            success=None, failure=None):
        return self._history(SlackAPIEndpoint.ChannelsHistory, id, latest=latest, oldest=oldest,
            inclusive=inclusive, count=count, unreads=unreads, success=success, failure=failure)

    def channel_info(self, id, success=None, failure=None):
        return self._info(SlackAPIEndpoint.ChannelsInfo, ChannelType.CHANNEL, id, success, failure)

    def channels_list(self, exclude_archived=False, success=None, failure=None):
        return self._list(SlackAPIEndpoint.ChannelsList, ChannelType.CHANNEL, exclude_archived,
            success, failure)

    def mark_channel(self, channel, timestamp, success=None, failure=None):
        return self._mark(SlackAPIEndpoint.ChannelsMark, channel, timestamp, success, failure)

    def set_channel_purpose(self, channel, purpose, success=None, failure=None):
        return self._set_info(SlackAPIEndpoint.ChannelsSetPurpose, InfoType.PURPOSE, channel, purpose,
            success, failure)

    def set_channel_topic(self, channel, topic, success=None, failure=None):
        return self._set_info(SlackAPIEndpoint.ChannelsSetTopic, InfoType.TOPIC, channel, topic,
            success, failure)

    #################### Messaging #####################
    def delete_message(self, channel, ts, success=None, failure=None):
        parameters = { "channel": channel, "ts": ts }
        return self._request(SlackAPIEndpoint.ChatDelete, parameters, _reply(success, _ok), failure)

    def send_message(self, channel, text, username=None, as_user=None, parse=None, link_names=None,
            attachments=None, unfurl_links=None, unfurl_media=None, icon_url=None, icon_emoji=None,
            thread_ts=None, success=None, failure=None):
        """Post a message with chat.postMessage

        text                the text, &, < and > are escaped before sending
        parse               a ParseMode, or "full" / "none"
        attachments         a list of Attachment, sent as a json string

        success             called with a tuple (ts, channel)
        """
        parameters = {
            "channel": channel,
            "text": slack_format_escaping(text),
            "as_user": as_user,
            "parse": _enum_value(parse),
            "link_names": link_names,
            "unfurl_links": unfurl_links,
            "unfurl_media": unfurl_media,
            "username": username,
            "attachments": encode_attachments(attachments),
            "icon_url": icon_url,
            "icon_emoji": icon_emoji,
            "thread_ts": thread_ts,
        }
        return self._request(SlackAPIEndpoint.ChatPostMessage, filter_nil_parameters(parameters),
            _reply(success, lambda response: (_get(response, "ts", str), _get(response, "channel", str))),
            failure)

    def update_message(self, channel, ts, message, attachments=None, parse=ParseMode.NONE, link_names=False,
            success=None, failure=None):
        parameters = {
            "channel": channel,
            "ts": ts,
            "text": slack_format_escaping(message),
            "parse": _enum_value(parse),
            "link_names": link_names,
            "attachments": encode_attachments(attachments),
        }
        return self._request(SlackAPIEndpoint.ChatUpdate, filter_nil_parameters(parameters),
            _reply(success, _ok), failure)

    #################### Do Not Disturb #####################
    def dnd_info(self, user=None, success=None, failure=None):
        parameters = { "user": user }
        return self._request(SlackAPIEndpoint.DNDInfo, filter_nil_parameters(parameters),
            _reply(success, DoNotDisturbStatus.from_json), failure)

    def dnd_team_info(self, users=None, success=None, failure=None):
        """success is called with a dict of user id to DoNotDisturbStatus
        """
        parameters = { "users": ",".join(users) if users is not None else None }
        return self._request(SlackAPIEndpoint.DNDTeamInfo, filter_nil_parameters(parameters),
            _reply(success, lambda response: self._enumerate_dnd_statuses(_get(response, "users", dict))),
            failure)

    #################### Emoji #####################
    def emoji_list(self, success=None, failure=None):
        return self._request(SlackAPIEndpoint.EmojiList, None,
            _reply(success, lambda response: _get(response, "emoji", dict)), failure)

    #################### Files #####################
    def delete_file(self, file_id, success=None, failure=None):
        parameters = { "file": file_id }
        return self._request(SlackAPIEndpoint.FilesDelete, parameters, _reply(success, _ok), failure)

    def upload_file(self, file, filename, filetype="auto", title=None, initial_comment=None, channels=None,
            success=None, failure=None):
        """Upload a file with files.upload

        file                the content of the file, as bytes
        channels            list of channel ids to share the file in
        """
        parameters = {
            "filename": filename,
            "filetype": filetype,
            "title": title,
            "initial_comment": initial_comment,
            "channels": ",".join(channels) if channels is not None else None,
        }
        return self.network_interface.upload_request(self.token, file, filter_nil_parameters(parameters),
            _reply(success, lambda response: File.from_json(response.get("file"))), failure)

    #################### File Comments #####################
    def add_file_comment(self, file_id, comment, success=None, failure=None):
        parameters = { "file": file_id, "comment": slack_format_escaping(comment) }
        return self._request(SlackAPIEndpoint.FilesCommentsAdd, parameters,
            _reply(success, lambda response: Comment.from_json(response.get("comment"))), failure)

    def edit_file_comment(self, file_id, comment_id, comment, success=None, failure=None):
        parameters = { "file": file_id, "id": comment_id, "comment": slack_format_escaping(comment) }
        return self._request(SlackAPIEndpoint.FilesCommentsEdit, parameters,
            _reply(success, lambda response: Comment.from_json(response.get("comment"))), failure)

    def delete_file_comment(self, file_id, comment_id, success=None, failure=None):
        parameters = { "file": file_id, "id": comment_id }
        return self._request(SlackAPIEndpoint.FilesCommentsDelete, parameters, _reply(success, _ok), failure)

    #################### Groups #####################
    def close_group(self, group_id, success=None, failure=None):
        return self._close(SlackAPIEndpoint.GroupsClose, group_id, success, failure)

    def group_history(self, id, latest=None, oldest="0", inclusive=False, count=100, unreads=False,
            success=None, failure=None):
        return self._history(SlackAPIEndpoint.GroupsHistory, id, latest=latest, oldest=oldest,
            inclusive=inclusive, count=count, unreads=unreads, success=success, failure=failure)

    def group_info(self, id, success=None, failure=None):
        return self._info(SlackAPIEndpoint.GroupsInfo, ChannelType.GROUP, id, success, failure)

    def groups_list(self, exclude_archived=False, success=None, failure=None):
        return self._list(SlackAPIEndpoint.GroupsList, ChannelType.GROUP, exclude_archived, success, failure)

    def mark_group(self, channel, timestamp, success=None, failure=None):
        return self._mark(SlackAPIEndpoint.GroupsMark, channel, timestamp, success, failure)

    def open_group(self, channel, success=None, failure=None):
        parameters = { "channel": channel }
        return self._request(SlackAPIEndpoint.GroupsOpen, parameters, _reply(success, _ok), failure)

    def set_group_purpose(self, channel, purpose, success=None, failure=None):
        return self._set_info(SlackAPIEndpoint.GroupsSetPurpose, InfoType.PURPOSE, channel, purpose,
            success, failure)

    def set_group_topic(self, channel, topic, success=None, failure=None):
        return self._set_info(SlackAPIEndpoint.GroupsSetTopic, InfoType.TOPIC, channel, topic,
            success, failure)

    #################### IM #####################
    def close_im(self, channel, success=None, failure=None):
        return self._close(SlackAPIEndpoint.IMClose, channel, success, failure)

    def im_history(self, id, latest=None, oldest="0", inclusive=False, count=100, unreads=False,
            success=None, failure=None):
        return self._history(SlackAPIEndpoint.IMHistory, id, latest=latest, oldest=oldest,
            inclusive=inclusive, count=count, unreads=unreads, success=success, failure=failure)

    def ims_list(self, exclude_archived=False, success=None, failure=None):
        return self._list(SlackAPIEndpoint.IMList, ChannelType.IM, exclude_archived, success, failure)

    def mark_im(self, channel, timestamp, success=None, failure=None):
        return self._mark(SlackAPIEndpoint.IMMark, channel, timestamp, success, failure)

    def open_im(self, user_id, success=None, failure=None):
        """success is called with the id of the im channel
        """
        parameters = { "user": user_id }
        return self._request(SlackAPIEndpoint.IMOpen, parameters,
            _reply(success, lambda response: self._nested_id(response, "channel")), failure)

    #################### MPIM #####################
    def close_mpim(self, channel, success=None, failure=None):
        return self._close(SlackAPIEndpoint.MPIMClose, channel, success, failure)

    def mpim_history(self, id, latest=None, oldest="0", inclusive=False, count=100, unreads=False,
            success=None, failure=None):
        return self._history(SlackAPIEndpoint.MPIMHistory, id, latest=latest, oldest=oldest,
            inclusive=inclusive, count=count, unreads=unreads, success=success, failure=failure)

    def mpims_list(self, exclude_archived=False, success=None, failure=None):
        # mpim.list answers with "groups"
        return self._list(SlackAPIEndpoint.MPIMList, ChannelType.GROUP, exclude_archived, success, failure)

    def mark_mpim(self, channel, timestamp, success=None, failure=None):
        return self._mark(SlackAPIEndpoint.MPIMMark, channel, timestamp, success, failure)

    def open_mpim(self, user_ids, success=None, failure=None):
        """success is called with the id of the mpim
        """
        parameters = { "users": ",".join(user_ids) }
        return self._request(SlackAPIEndpoint.MPIMOpen, parameters,
            _reply(success, lambda response: self._nested_id(response, "group")), failure)

    #################### Pins #####################
    def pin_item(self, channel, file=None, file_comment=None, timestamp=None, success=None, failure=None):
        return self._pin(SlackAPIEndpoint.PinsAdd, channel, file, file_comment, timestamp, success, failure)

    def unpin_item(self, channel, file=None, file_comment=None, timestamp=None, success=None, failure=None):
        return self._pin(SlackAPIEndpoint.PinsRemove, channel, file, file_comment, timestamp, success, failure)

    #################### Reactions #####################
    # One of file, file_comment, or the combination of channel and timestamp must be specified.
    def add_reaction(self, name, file=None, file_comment=None, channel=None, timestamp=None,
            success=None, failure=None):
        return self._react(SlackAPIEndpoint.ReactionsAdd, name, file, file_comment, channel, timestamp,
            success, failure)

    def remove_reaction(self, name, file=None, file_comment=None, channel=None, timestamp=None,
            success=None, failure=None):
        return self._react(SlackAPIEndpoint.ReactionsRemove, name, file, file_comment, channel, timestamp,
            success, failure)

    def get_reactions(self, file=None, file_comment=None, channel=None, timestamp=None, full=None,
            success=None, failure=None):
        """success is called with the whole response, which holds the item under its type
        ("message", "file" or "comment")
        """
        parameters = { "file": file, "file_comment": file_comment, "channel": channel,
                "timestamp": timestamp, "full": full }
        return self._request(SlackAPIEndpoint.ReactionsGet, filter_nil_parameters(parameters),
            _reply(success, lambda response: response), failure)

    def reactions_list(self, user=None, full=None, count=None, page=None, success=None, failure=None):
        parameters = { "user": user, "full": full, "count": count, "page": page }
        return self._request(SlackAPIEndpoint.ReactionsList, filter_nil_parameters(parameters),
            _reply(success, lambda response: _get(response, "items", list)), failure)

    #################### Stars #####################
    # One of file, file_comment, channel, or the combination of channel and timestamp must be specified.
    def add_star(self, file=None, file_comment=None, channel=None, timestamp=None, success=None, failure=None):
        return self._star(SlackAPIEndpoint.StarsAdd, file, file_comment, channel, timestamp, success, failure)

    def remove_star(self, file=None, file_comment=None, channel=None, timestamp=None, success=None,
            failure=None):
        return self._star(SlackAPIEndpoint.StarsRemove, file, file_comment, channel, timestamp,
            success, failure)

    #################### Team #####################
    def team_info(self, success=None, failure=None):
        return self._request(SlackAPIEndpoint.TeamInfo, None,
            _reply(success, lambda response: _get(response, "team", dict)), failure)

    #################### Users #####################
    def user_presence(self, user, success=None, failure=None):
        parameters = { "user": user }
        return self._request(SlackAPIEndpoint.UsersGetPresence, parameters,
            _reply(success, lambda response: _get(response, "presence", str)), failure)

    def user_info(self, id, success=None, failure=None):
        parameters = { "user": id }
        return self._request(SlackAPIEndpoint.UsersInfo, parameters,
            _reply(success, lambda response: User.from_json(response.get("user"))), failure)

    def users_list(self, include_presence=False, success=None, failure=None):
        parameters = { "presence": include_presence }
        return self._request(SlackAPIEndpoint.UsersList, parameters,
            _reply(success, lambda response: _get(response, "members", list)), failure)

    def set_user_active(self, success=None, failure=None):
        return self._request(SlackAPIEndpoint.UsersSetActive, None, _reply(success, _ok), failure)

    def set_user_presence(self, presence, success=None, failure=None):
        parameters = { "presence": _enum_value(presence) }
        return self._request(SlackAPIEndpoint.UsersSetPresence, parameters, _reply(success, _ok), failure)

    #################### Channel Utilities #####################
    def _close(self, endpoint, channel_id, success, failure):
        parameters = { "channel": channel_id }
        return self._request(endpoint, parameters, _reply(success, _ok), failure)

    def _history(self, endpoint, id, latest=None, oldest="0", inclusive=False, count=100, unreads=False,
            success=None, failure=None):
        parameters = {
            "channel": id,
            "latest": latest if latest is not None else slack_timestamp(),
            "oldest": oldest,
            "inclusive": inclusive,
            "count": count,
            "unreads": unreads,
        }
        return self._request(endpoint, parameters, _reply(success, History.from_json), failure)

    def _info(self, endpoint, channel_type, id, success, failure):
        parameters = { "channel": id }
        return self._request(endpoint, parameters,
            _reply(success, lambda response: Channel.from_json(response.get(channel_type.value))), failure)

    def _list(self, endpoint, channel_type, exclude_archived, success, failure):
        parameters = { "exclude_archived": exclude_archived }
        return self._request(endpoint, parameters,
            _reply(success, lambda response: _get(response, channel_type.value + "s", list)), failure)

    def _mark(self, endpoint, channel, timestamp, success, failure):
        parameters = { "channel": channel, "ts": timestamp }
        return self._request(endpoint, parameters, _reply(success, lambda response: timestamp), failure)

    def _set_info(self, endpoint, info_type, channel, text, success, failure):
        parameters = { "channel": channel, info_type.value: text }
        return self._request(endpoint, parameters, _reply(success, _ok), failure)

    def _pin(self, endpoint, channel, file, file_comment, timestamp, success, failure):
        parameters = { "channel": channel, "file": file, "file_comment": file_comment, "timestamp": timestamp }
        return self._request(endpoint, filter_nil_parameters(parameters), _reply(success, _ok), failure)

    def _react(self, endpoint, name, file, file_comment, channel, timestamp, success, failure):
        parameters = { "name": name, "file": file, "file_comment": file_comment, "channel": channel,
                "timestamp": timestamp }
        return self._request(endpoint, filter_nil_parameters(parameters), _reply(success, _ok), failure)

    def _star(self, endpoint, file, file_comment, channel, timestamp, success, failure):
        parameters = { "file": file, "file_comment": file_comment, "channel": channel, "timestamp": timestamp }
        return self._request(endpoint, filter_nil_parameters(parameters), _reply(success, _ok), failure)

    #################### Response helpers #####################
    @staticmethod
    def _nested_id(response, key):
        inner = _get(response, key, dict)
        if inner is None:
            return None
        return _get(inner, "id", str)

    @staticmethod
    def _enumerate_dnd_statuses(statuses):
        if statuses is None:
            return {}
        return { user_id: DoNotDisturbStatus.from_json(status) for user_id, status in statuses.items() }
