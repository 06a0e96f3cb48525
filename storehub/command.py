"""Command line script for StoreHub."""
import os
import shutil
import sys
from argparse import ArgumentParser, Namespace, RawTextHelpFormatter
from textwrap import dedent
from typing import Optional, Sequence

import uvicorn
from sqlalchemy.engine import make_url

from storehub.config import Config
from storehub.core import StoreHubError
from storehub.logging import get_logger
from storehub.orm import init_db
from storehub.utils import Fore, bold, fg

YELLOW, CYAN, RED, GREEN = Fore.YELLOW, Fore.CYAN, Fore.RED, Fore.GREEN
WHITE_EX, CYAN_EX = Fore.LIGHTWHITE_EX, Fore.LIGHTCYAN_EX

APP_FACTORY = "storehub.api:create_app"

logger = get_logger("storehub.command")


class StoreHubCommand:
    """콘솔 명령어의 실제 작업을 수행합니다."""

    def __init__(self, config: Optional[Config] = None):
        self._config = config

    @property
    def config(self) -> Config:
        # 설정은 실제 명령어를 실행할 때 한 번만 로드합니다.
        if self._config is None:
            self._config = Config.from_env()
        return self._config

    def banner(self, msg, icon=""):
        """프로젝트 배너를 표시합니다."""
        if os.name == "nt":
            icon = ""
        banner_width = min(75, shutil.get_terminal_size().columns)
        print("─" * banner_width)
        print(f"{icon} {msg}")
        print("─" * banner_width)

    def db_url(self) -> str:
        """비밀번호를 가린 DB URL."""
        return make_url(self.config.get_db_url()).render_as_string(hide_password=True)

    def info(self):
        """StoreHub 설정 정보를 출력합니다."""
        dot = bold("-", YELLOW)
        self.banner(f"{bold('StoreHub Information')}", icon="💡")
        print(dot, fg("Title", CYAN), "   :", fg(self.config.title, WHITE_EX))
        print(dot, fg("Mode", CYAN), "    :", fg(self.config.mode, WHITE_EX))
        print(dot, fg("API", CYAN), "     :", fg(self.config.get_api_url(), WHITE_EX))
        print(dot, fg("Database", CYAN), ":", fg(self.db_url(), WHITE_EX))

    def initdb(self, drop=False):
        """DB 테이블을 생성합니다.

        --drop 옵션을 주면 기존 테이블을 모두 지우고 다시 만듭니다.
        """
        bullet = bold("✓" if os.name != "nt" else "v", GREEN)
        init_db(self.config, drop_all=drop)
        logger.info(
            f"{bullet} init {fg('database', CYAN)}... %s",
            bold(self.db_url(), YELLOW),
        )

    def run(self, reload=False, banner=True):
        """StoreHub API 서버를 실행합니다."""
        if banner:
            msg = "".join(
                [
                    bold("Launching StoreHub: ", CYAN),
                    bold(self.config.get_api_url(), WHITE_EX),
                ]
            )
            self.banner(msg, icon="🚀")

        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host=self.config.get_api_host(),
            port=self.config.get_api_port(),
            reload=reload,
        )


class StoreHubCommandParser:
    """콘솔 커맨드 명령어 파서.

    실제 작업은 `StoreHubCommand` 객체에 위임합니다.
    """

    def __init__(self, cmd: Optional[StoreHubCommand] = None):
        """기본 생성자."""
        self.parser = ArgumentParser(
            "storehub",
            description=f"✨ {bold('StoreHub')} : {fg('command line utility', CYAN_EX)}",
        )
        self._subparsers = self.parser.add_subparsers(dest="command")
        self._cmd = cmd or StoreHubCommand()

        # init subparsers
        for handler in [
            self._cmd.info,
            self._cmd.initdb,
            self._cmd.run,
        ]:
            command = handler.__name__
            # 핸들러 함수의 주석을 커맨드라인 도움말로 변환하기 위한 작업입니다.
            doc = None
            if handler.__doc__:
                lines = handler.__doc__.splitlines()
                doc = lines[0] + "\n" + dedent("\n".join(lines[1:]))
            parser = self._subparsers.add_parser(
                command,
                description=doc,
                formatter_class=RawTextHelpFormatter,
            )
            if command == "initdb":
                parser.add_argument(
                    "--drop", action="store_true", help="기존 테이블을 지우고 다시 생성"
                )
            if command == "run":
                parser.add_argument(
                    "--reload", action="store_true", help="소스 변경시 서버 재시작"
                )

    def parse_args(self, args: Sequence[str]) -> int:
        """콘솔 명령어를 해석해서 적절한 작업을 수행합니다.

        종료 코드를 리턴합니다.
        """
        if not args:
            self.parser.print_help()
            return 0

        ns = self.parser.parse_args(args)
        try:
            if hasattr(self, ns.command):
                # 커맨드 명령어와 동일한 이름의 메소드가 파서 클래스에 있으면
                # 그 메소드를 호출해서 적당한 처리 후 실제 메소드를 호출합니다.
                getattr(self, ns.command)(ns)
            else:
                getattr(self._cmd, ns.command)()
        except StoreHubError as e:
            print(
                f"{bold('StoreHub ERROR:', RED)} {fg(e.message, YELLOW)}",
                file=sys.stderr,
            )
            return 1
        return 0

    def initdb(self, ns: Namespace):
        """`initdb` 명령어 처리."""
        self._cmd.initdb(drop=ns.drop)

    def run(self, ns: Namespace):
        """`run` 명령어 처리."""
        self._cmd.run(reload=ns.reload)


def console_main():
    parser = StoreHubCommandParser()
    sys.exit(parser.parse_args(sys.argv[1:]))


if __name__ == "__main__":
    console_main()
