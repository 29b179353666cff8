import json
import time


def filter_nil_parameters(parameters):
    """Drop the params that are None

    parameters          key/value pair of params, with optional values

    return              a new dict, without the None values
    """
    return { key: value for key, value in parameters.items() if value is not None }


def encode_attachments(attachments):
    """Serialize a list of Attachment to the json string that slack expects as a form field

    None entries in the list are skipped. Returns None if attachments is None.
    """
    if attachments is None:
        return None
    return json.dumps([ attachment.to_dict() for attachment in attachments if attachment is not None ])


def slack_format_escaping(text):
    """Escape the 3 characters slack reserves for its markup.
    """
    if text is None:
        return None
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def slack_timestamp():
    return str(time.time())
