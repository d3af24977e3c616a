from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_dotenv_if_present(env_path: Optional[str | Path] = None) -> None:
    """
    尝试加载 .env 文件（如果存在），已存在的环境变量不会被覆盖。

    默认查找当前工作目录下的 .env。
    """
    env_file = Path(env_path) if env_path is not None else Path.cwd() / ".env"
    if env_file.is_file():
        load_dotenv(dotenv_path=env_file, override=False)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
