from dataclasses import dataclass
import os

from dotenv import load_dotenv

load_dotenv()

@dataclass
class Config:
    """Mapper configuration"""
    # Reserved template keys
    scope_key: str = os.getenv("HTMLMAPPER_SCOPE_KEY", "$")
    pipe_key: str = os.getenv("HTMLMAPPER_PIPE_KEY", "|")

    # BeautifulSoup tree builder used for markup text: html.parser, lxml, html5lib
    parser: str = os.getenv("HTMLMAPPER_PARSER", "html.parser")

    # Only applied by the CLI; library code never configures handlers
    log_level: str = os.getenv("HTMLMAPPER_LOG_LEVEL", "WARNING").upper()

    def __post_init__(self):
        if not self.scope_key:
            raise ValueError("HTMLMAPPER_SCOPE_KEY must not be empty")
        if not self.pipe_key:
            raise ValueError("HTMLMAPPER_PIPE_KEY must not be empty")

config = Config()
