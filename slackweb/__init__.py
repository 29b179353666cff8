
from .errors import SlackError, ParameterError
from .endpoints import SlackAPIEndpoint
from .models import (User, Channel, Message, History, File, Comment, Attachment,
        AttachmentField, DoNotDisturbStatus)
from .network import NetworkInterface
from .web_api import SlackWebAPI, InfoType, ParseMode, Presence
from .slack import Slack
