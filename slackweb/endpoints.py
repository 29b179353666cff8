import enum


class SlackAPIEndpoint(enum.Enum):
    APITest = "api.test"
    AuthTest = "auth.test"
    ChannelsHistory = "channels.history"
    ChannelsInfo = "channels.info"
    ChannelsList = "channels.list"
    ChannelsMark = "channels.mark"
    ChannelsSetPurpose = "channels.setPurpose"
    ChannelsSetTopic = "channels.setTopic"
    ChatDelete = "chat.delete"
    ChatPostMessage = "chat.postMessage"
    ChatUpdate = "chat.update"
    DNDInfo = "dnd.info"
    DNDTeamInfo = "dnd.teamInfo"
    EmojiList = "emoji.list"
    FilesCommentsAdd = "files.comments.add"
    FilesCommentsEdit = "files.comments.edit"
    FilesCommentsDelete = "files.comments.delete"
    FilesDelete = "files.delete"
    FilesUpload = "files.upload"
    GroupsClose = "groups.close"
    GroupsHistory = "groups.history"
    GroupsInfo = "groups.info"
    GroupsList = "groups.list"
    GroupsMark = "groups.mark"
    GroupsOpen = "groups.open"
    GroupsSetPurpose = "groups.setPurpose"
    GroupsSetTopic = "groups.setTopic"
    IMClose = "im.close"
    IMHistory = "im.history"
    IMList = "im.list"
    IMMark = "im.mark"
    IMOpen = "im.open"
    MPIMClose = "mpim.close"
    MPIMHistory = "mpim.history"
    MPIMList = "mpim.list"
    MPIMMark = "mpim.mark"
    MPIMOpen = "mpim.open"
    PinsAdd = "pins.add"
    PinsRemove = "pins.remove"
    ReactionsAdd = "reactions.add"
    ReactionsGet = "reactions.get"
    ReactionsList = "reactions.list"
    ReactionsRemove = "reactions.remove"
    RTMStart = "rtm.start"
    StarsAdd = "stars.add"
    StarsRemove = "stars.remove"
    TeamInfo = "team.info"
    UsersGetPresence = "users.getPresence"
    UsersInfo = "users.info"
    UsersList = "users.list"
    UsersSetActive = "users.setActive"
    UsersSetPresence = "users.setPresence"


GET = "GET"
POST = "POST"

TYPE_STRING = "string"
TYPE_INT = "int"
TYPE_BOOL_STRING = "bool_string"
TYPE_COMMA_STRING = "comma_string"

_REQUIRED_CHANNEL = { "channel": { "type": TYPE_STRING, "is_required": True } }

_HISTORY_PARAMS = {
    "channel": { "type": TYPE_STRING, "is_required": True },
    "latest": { "type": TYPE_STRING },
    "oldest": { "type": TYPE_STRING },
    "inclusive": { "type": TYPE_BOOL_STRING },
    "count": { "type": TYPE_INT },
    "unreads": { "type": TYPE_BOOL_STRING },
}

_LIST_PARAMS = {
    "exclude_archived": { "type": TYPE_BOOL_STRING },
}

_MARK_PARAMS = {
    "channel": { "type": TYPE_STRING, "is_required": True },
    "ts": { "type": TYPE_STRING, "is_required": True },
}

_PURPOSE_PARAMS = {
    "channel": { "type": TYPE_STRING, "is_required": True },
    "purpose": { "type": TYPE_STRING, "is_required": True },
}

_TOPIC_PARAMS = {
    "channel": { "type": TYPE_STRING, "is_required": True },
    "topic": { "type": TYPE_STRING, "is_required": True },
}

_ITEM_PARAMS = {
    "file": { "type": TYPE_STRING },
    "file_comment": { "type": TYPE_STRING },
    "channel": { "type": TYPE_STRING },
    "timestamp": { "type": TYPE_STRING },
}

_PARSE_CHOICES = ("full", "none")

# Every endpoint the client knows, with its http method and the params it accepts.
# Params not listed here are rejected before a request is made.
DEFINITIONS = {
    SlackAPIEndpoint.APITest: {
        "method": GET,
        "params": {
            "error": { "type": TYPE_STRING },
            "foo": { "type": TYPE_STRING },
        },
    },
    SlackAPIEndpoint.AuthTest: { "method": GET, "params": {} },

    SlackAPIEndpoint.ChannelsHistory: { "method": GET, "params": _HISTORY_PARAMS },
    SlackAPIEndpoint.ChannelsInfo: { "method": GET, "params": _REQUIRED_CHANNEL },
    SlackAPIEndpoint.ChannelsList: { "method": GET, "params": _LIST_PARAMS },
    SlackAPIEndpoint.ChannelsMark: { "method": POST, "params": _MARK_PARAMS },
    SlackAPIEndpoint.ChannelsSetPurpose: { "method": POST, "params": _PURPOSE_PARAMS },
    SlackAPIEndpoint.ChannelsSetTopic: { "method": POST, "params": _TOPIC_PARAMS },

    SlackAPIEndpoint.ChatDelete: {
        "method": POST,
        "params": {
            "channel": { "type": TYPE_STRING, "is_required": True },
            "ts": { "type": TYPE_STRING, "is_required": True },
        },
    },
    SlackAPIEndpoint.ChatPostMessage: {
        "method": POST,
        "params": {
            "channel": { "type": TYPE_STRING, "is_required": True },
            "text": { "type": TYPE_STRING },
            "username": { "type": TYPE_STRING },
            "as_user": { "type": TYPE_BOOL_STRING },
            "parse": { "type": TYPE_STRING, "choices": _PARSE_CHOICES },
            "link_names": { "type": TYPE_BOOL_STRING },
            "attachments": { "type": TYPE_STRING },
            "unfurl_links": { "type": TYPE_BOOL_STRING },
            "unfurl_media": { "type": TYPE_BOOL_STRING },
            "icon_url": { "type": TYPE_STRING },
            "icon_emoji": { "type": TYPE_STRING },
            "thread_ts": { "type": TYPE_STRING },
        },
    },
    SlackAPIEndpoint.ChatUpdate: {
        "method": POST,
        "params": {
            "channel": { "type": TYPE_STRING, "is_required": True },
            "ts": { "type": TYPE_STRING, "is_required": True },
            "text": { "type": TYPE_STRING },
            "parse": { "type": TYPE_STRING, "choices": _PARSE_CHOICES },
            "link_names": { "type": TYPE_BOOL_STRING },
            "attachments": { "type": TYPE_STRING },
        },
    },

    SlackAPIEndpoint.DNDInfo: {
        "method": GET,
        "params": { "user": { "type": TYPE_STRING } },
    },
    SlackAPIEndpoint.DNDTeamInfo: {
        "method": GET,
        "params": { "users": { "type": TYPE_COMMA_STRING } },
    },

    SlackAPIEndpoint.EmojiList: { "method": GET, "params": {} },

    SlackAPIEndpoint.FilesCommentsAdd: {
        "method": POST,
        "params": {
            "file": { "type": TYPE_STRING, "is_required": True },
            "comment": { "type": TYPE_STRING, "is_required": True },
        },
    },
    SlackAPIEndpoint.FilesCommentsEdit: {
        "method": POST,
        "params": {
            "file": { "type": TYPE_STRING, "is_required": True },
            "id": { "type": TYPE_STRING, "is_required": True },
            "comment": { "type": TYPE_STRING, "is_required": True },
        },
    },
    SlackAPIEndpoint.FilesCommentsDelete: {
        "method": POST,
        "params": {
            "file": { "type": TYPE_STRING, "is_required": True },
            "id": { "type": TYPE_STRING, "is_required": True },
        },
    },
    SlackAPIEndpoint.FilesDelete: {
        "method": POST,
        "params": { "file": { "type": TYPE_STRING, "is_required": True } },
    },
    SlackAPIEndpoint.FilesUpload: {
        "method": POST,
        "params": {
            "filename": { "type": TYPE_STRING, "is_required": True },
            "filetype": { "type": TYPE_STRING },
            "title": { "type": TYPE_STRING },
            "initial_comment": { "type": TYPE_STRING },
            "channels": { "type": TYPE_COMMA_STRING },
        },
    },

    SlackAPIEndpoint.GroupsClose: { "method": POST, "params": _REQUIRED_CHANNEL },
    SlackAPIEndpoint.GroupsHistory: { "method": GET, "params": _HISTORY_PARAMS },
    SlackAPIEndpoint.GroupsInfo: { "method": GET, "params": _REQUIRED_CHANNEL },
    SlackAPIEndpoint.GroupsList: { "method": GET, "params": _LIST_PARAMS },
    SlackAPIEndpoint.GroupsMark: { "method": POST, "params": _MARK_PARAMS },
    SlackAPIEndpoint.GroupsOpen: { "method": POST, "params": _REQUIRED_CHANNEL },
    SlackAPIEndpoint.GroupsSetPurpose: { "method": POST, "params": _PURPOSE_PARAMS },
    SlackAPIEndpoint.GroupsSetTopic: { "method": POST, "params": _TOPIC_PARAMS },

    SlackAPIEndpoint.IMClose: { "method": POST, "params": _REQUIRED_CHANNEL },
    SlackAPIEndpoint.IMHistory: { "method": GET, "params": _HISTORY_PARAMS },
    SlackAPIEndpoint.IMList: { "method": GET, "params": _LIST_PARAMS },
    SlackAPIEndpoint.IMMark: { "method": POST, "params": _MARK_PARAMS },
    SlackAPIEndpoint.IMOpen: {
        "method": POST,
        "params": { "user": { "type": TYPE_STRING, "is_required": True } },
    },

    SlackAPIEndpoint.MPIMClose: { "method": POST, "params": _REQUIRED_CHANNEL },
    SlackAPIEndpoint.MPIMHistory: { "method": GET, "params": _HISTORY_PARAMS },
    SlackAPIEndpoint.MPIMList: { "method": GET, "params": _LIST_PARAMS },
    SlackAPIEndpoint.MPIMMark: { "method": POST, "params": _MARK_PARAMS },
    SlackAPIEndpoint.MPIMOpen: {
        "method": POST,
        "params": { "users": { "type": TYPE_COMMA_STRING, "is_required": True } },
    },

    SlackAPIEndpoint.PinsAdd: {
        "method": POST,
        "params": dict(_ITEM_PARAMS, channel={ "type": TYPE_STRING, "is_required": True }),
    },
    SlackAPIEndpoint.PinsRemove: {
        "method": POST,
        "params": dict(_ITEM_PARAMS, channel={ "type": TYPE_STRING, "is_required": True }),
    },

    SlackAPIEndpoint.ReactionsAdd: {
        "method": POST,
        "params": dict(_ITEM_PARAMS, name={ "type": TYPE_STRING, "is_required": True }),
    },
    SlackAPIEndpoint.ReactionsGet: {
        "method": GET,
        "params": dict(_ITEM_PARAMS, full={ "type": TYPE_BOOL_STRING }),
    },
    SlackAPIEndpoint.ReactionsList: {
        "method": GET,
        "params": {
            "user": { "type": TYPE_STRING },
            "full": { "type": TYPE_BOOL_STRING },
            "count": { "type": TYPE_INT },
            "page": { "type": TYPE_INT },
        },
    },
    SlackAPIEndpoint.ReactionsRemove: {
        "method": POST,
        "params": dict(_ITEM_PARAMS, name={ "type": TYPE_STRING, "is_required": True }),
    },

    SlackAPIEndpoint.RTMStart: {
        "method": GET,
        "params": {
            "simple_latest": { "type": TYPE_BOOL_STRING },
            "no_unreads": { "type": TYPE_BOOL_STRING },
            "mpim_aware": { "type": TYPE_BOOL_STRING },
        },
    },

    SlackAPIEndpoint.StarsAdd: { "method": POST, "params": _ITEM_PARAMS },
    SlackAPIEndpoint.StarsRemove: { "method": POST, "params": _ITEM_PARAMS },

    SlackAPIEndpoint.TeamInfo: { "method": GET, "params": {} },

    SlackAPIEndpoint.UsersGetPresence: {
        "method": GET,
        "params": { "user": { "type": TYPE_STRING, "is_required": True } },
    },
    SlackAPIEndpoint.UsersInfo: {
        "method": GET,
        "params": { "user": { "type": TYPE_STRING, "is_required": True } },
    },
    SlackAPIEndpoint.UsersList: {
        "method": GET,
        "params": { "presence": { "type": TYPE_BOOL_STRING } },
    },
    SlackAPIEndpoint.UsersSetActive: { "method": POST, "params": {} },
    SlackAPIEndpoint.UsersSetPresence: {
        "method": POST,
        "params": {
            "presence": { "type": TYPE_STRING, "is_required": True, "choices": ("auto", "away") },
        },
    },
}
