from datetime import datetime, timezone

from colorama import init as init_colors

init_colors()  # For Windows environment

from colorama import Fore, Style  # noqa: E402


def fg(text, color=Fore.WHITE):
    """텍스트를 지정된 ANSI 컬러로 출력합니다."""
    return f"{color}{text}{Fore.RESET}"


def bold(text, color=Fore.WHITE):
    """텍스트를 지정된 ANSI 컬러와 밝기 효과를 주어 출력합니다."""
    return f"{Style.BRIGHT}{color}{text}{Style.RESET_ALL}"


def utcnow() -> datetime:
    """타임존 정보가 없는 현재 UTC 시각. DB 의 ``DateTime`` 컬럼에 그대로 저장됩니다."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
