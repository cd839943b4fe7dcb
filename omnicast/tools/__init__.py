# Re-export tool modules so `from omnicast import tools; tools.http_tool.send(...)` works.
from . import http_tool
from . import secrets_tool
