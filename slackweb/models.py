"""
View models for the objects returned by the slack web api.

Every model is built with from_json, which takes the mapping found in the
response and returns None if that mapping is missing. Missing keys become None,
and the original mapping is kept in .raw.
"""


def _value(data, key, expected_type=None):
    value = data.get(key)
    if expected_type is not None and value is not None and not isinstance(value, expected_type):
        return None
    return value


def _mapping(data, key):
    return _value(data, key, dict)


def _text_value(data, key):
    # topic and purpose are objects of the form {"value": ..., "creator": ..., "last_set": ...}
    inner = _mapping(data, key)
    return inner.get("value") if inner is not None else None


class _Model(object):

    def __init__(self, raw):
        self.raw = raw

    @classmethod
    def from_json(cls, data):
        if not isinstance(data, dict):
            return None
        return cls(data)

    def __repr__(self):
        return "{0}(id={1!r})".format(type(self).__name__, getattr(self, "id", None))


class User(_Model):

    def __init__(self, raw):
        super().__init__(raw)
        self.id = _value(raw, "id", str)
        self.name = _value(raw, "name", str)
        self.deleted = _value(raw, "deleted", bool)
        self.color = _value(raw, "color", str)
        self.real_name = _value(raw, "real_name", str)
        self.tz = _value(raw, "tz", str)
        self.tz_label = _value(raw, "tz_label", str)
        self.tz_offset = _value(raw, "tz_offset", int)
        self.is_admin = _value(raw, "is_admin", bool)
        self.is_owner = _value(raw, "is_owner", bool)
        self.is_primary_owner = _value(raw, "is_primary_owner", bool)
        self.is_restricted = _value(raw, "is_restricted", bool)
        self.is_ultra_restricted = _value(raw, "is_ultra_restricted", bool)
        self.is_bot = _value(raw, "is_bot", bool)
        self.has_2fa = _value(raw, "has_2fa", bool)
        self.presence = _value(raw, "presence", str)
        self.profile = _mapping(raw, "profile")

    @property
    def email(self):
        return self.profile.get("email") if self.profile is not None else None


class Channel(_Model):
    """A public channel, private group, im or mpim
    """

    def __init__(self, raw):
        super().__init__(raw)
        self.id = _value(raw, "id", str)
        self.name = _value(raw, "name", str)
        self.created = _value(raw, "created", int)
        self.creator = _value(raw, "creator", str)
        self.is_archived = _value(raw, "is_archived", bool)
        self.is_general = _value(raw, "is_general", bool)
        self.is_group = _value(raw, "is_group", bool)
        self.is_im = _value(raw, "is_im", bool)
        self.is_mpim = _value(raw, "is_mpim", bool)
        self.is_member = _value(raw, "is_member", bool)
        self.is_open = _value(raw, "is_open", bool)
        self.user = _value(raw, "user", str)
        self.last_read = _value(raw, "last_read", str)
        self.unread_count = _value(raw, "unread_count", int)
        self.unread_count_display = _value(raw, "unread_count_display", int)
        self.members = _value(raw, "members", list)
        self.topic = _text_value(raw, "topic")
        self.purpose = _text_value(raw, "purpose")
        self.latest = Message.from_json(raw.get("latest"))


class Message(_Model):

    def __init__(self, raw):
        super().__init__(raw)
        self.type = _value(raw, "type", str)
        self.subtype = _value(raw, "subtype", str)
        self.ts = _value(raw, "ts", str)
        self.thread_ts = _value(raw, "thread_ts", str)
        self.user = _value(raw, "user", str)
        self.bot_id = _value(raw, "bot_id", str)
        self.username = _value(raw, "username", str)
        self.channel = _value(raw, "channel", str)
        self.text = _value(raw, "text", str)
        self.is_starred = _value(raw, "is_starred", bool)
        self.pinned_to = _value(raw, "pinned_to", list)
        self.reactions = _value(raw, "reactions", list) or []
        self.attachments = [ Attachment.from_json(a) for a in (_value(raw, "attachments", list) or [])
                if isinstance(a, dict) ]
        self.file = File.from_json(raw.get("file"))
        self.comment = Comment.from_json(raw.get("comment"))

    def __repr__(self):
        return "Message(ts={0!r})".format(self.ts)


class History(_Model):

    def __init__(self, raw):
        super().__init__(raw)
        self.latest = _value(raw, "latest", str)
        self.has_more = _value(raw, "has_more", bool)
        self.messages = [ Message.from_json(m) for m in (_value(raw, "messages", list) or [])
                if isinstance(m, dict) ]

    def __repr__(self):
        return "History(messages={0}, has_more={1!r})".format(len(self.messages), self.has_more)


class File(_Model):

    def __init__(self, raw):
        super().__init__(raw)
        self.id = _value(raw, "id", str)
        self.created = _value(raw, "created", int)
        self.name = _value(raw, "name", str)
        self.title = _value(raw, "title", str)
        self.mimetype = _value(raw, "mimetype", str)
        self.filetype = _value(raw, "filetype", str)
        self.pretty_type = _value(raw, "pretty_type", str)
        self.user = _value(raw, "user", str)
        self.mode = _value(raw, "mode", str)
        self.editable = _value(raw, "editable", bool)
        self.is_external = _value(raw, "is_external", bool)
        self.external_type = _value(raw, "external_type", str)
        self.size = _value(raw, "size", int)
        self.url_private = _value(raw, "url_private", str)
        self.url_private_download = _value(raw, "url_private_download", str)
        self.permalink = _value(raw, "permalink", str)
        self.permalink_public = _value(raw, "permalink_public", str)
        self.preview = _value(raw, "preview", str)
        self.is_public = _value(raw, "is_public", bool)
        self.is_starred = _value(raw, "is_starred", bool)
        self.channels = _value(raw, "channels", list) or []
        self.groups = _value(raw, "groups", list) or []
        self.ims = _value(raw, "ims", list) or []
        self.pinned_to = _value(raw, "pinned_to", list)
        self.reactions = _value(raw, "reactions", list) or []
        self.comments_count = _value(raw, "comments_count", int)
        self.initial_comment = Comment.from_json(raw.get("initial_comment"))


class Comment(_Model):

    def __init__(self, raw):
        super().__init__(raw)
        self.id = _value(raw, "id", str)
        self.created = _value(raw, "created", int)
        self.timestamp = _value(raw, "timestamp", int)
        self.user = _value(raw, "user", str)
        self.comment = _value(raw, "comment", str)


class DoNotDisturbStatus(_Model):

    def __init__(self, raw):
        super().__init__(raw)
        self.enabled = _value(raw, "dnd_enabled", bool)
        self.next_start_timestamp = _value(raw, "next_dnd_start_ts", int)
        self.next_end_timestamp = _value(raw, "next_dnd_end_ts", int)
        self.snooze_enabled = _value(raw, "snooze_enabled", bool)
        self.snooze_endtime = _value(raw, "snooze_endtime", int)

    def __repr__(self):
        return "DoNotDisturbStatus(enabled={0!r})".format(self.enabled)


class AttachmentField(object):

    def __init__(self, title=None, value=None, short=None):
        self.title = title
        self.value = value
        self.short = short

    @classmethod
    def from_json(cls, data):
        if not isinstance(data, dict):
            return None
        return cls(title=data.get("title"), value=data.get("value"), short=data.get("short"))

    def to_dict(self):
        return { key: value for key, value in
                (("title", self.title), ("value", self.value), ("short", self.short))
                if value is not None }


class Attachment(object):
    """A message attachment

    Unlike the other models, attachments are also built by the caller and sent
    with chat.postMessage / chat.update, so every field is a keyword argument.
    """

    FIELDS = (
        "fallback", "callback_id", "color", "pretext",
        "author_name", "author_link", "author_icon",
        "title", "title_link", "text", "image_url", "thumb_url",
        "footer", "footer_icon", "ts", "mrkdwn_in",
    )

    def __init__(self, fields=None, **kwargs):
        for key in kwargs:
            if key not in Attachment.FIELDS:
                raise TypeError("{0} is not a valid attachment field".format(key))
        for key in Attachment.FIELDS:
            setattr(self, key, kwargs.get(key))
        self.fields = fields

    @classmethod
    def from_json(cls, data):
        if not isinstance(data, dict):
            return None
        kwargs = { key: data[key] for key in Attachment.FIELDS if key in data }
        fields = data.get("fields")
        if isinstance(fields, list):
            kwargs["fields"] = [ AttachmentField.from_json(f) for f in fields if isinstance(f, dict) ]
        return cls(**kwargs)

    def to_dict(self):
        data = {}
        for key in Attachment.FIELDS:
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.fields is not None:
            data["fields"] = [ field.to_dict() for field in self.fields if field is not None ]
        return data

    def __repr__(self):
        return "Attachment(title={0!r})".format(self.title)
