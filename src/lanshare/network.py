"""Выбор локального сетевого адреса, который будет объявлен клиентам.

Если у машины несколько интерфейсов, оператору показывается нумерованный
список и предлагается ввести индекс. Ввод соревнуется с таймером: что
случится раньше, то и решает. Поток чтения консоли нельзя надёжно прервать,
поэтому проигравший поток просто бросается (он демонический).
"""

from __future__ import annotations

import ipaddress
import logging
import queue
import sys
import threading
from typing import Callable, Dict, List, Mapping, Optional, TextIO

import netifaces

from .models import InterfaceCandidate

logger = logging.getLogger(__name__)

PROMPT = "Please input the interface index[0]: "


class InterfaceSelectionError(RuntimeError):
    """Фатальная ошибка выбора интерфейса при старте."""


class NoAddressError(InterfaceSelectionError):
    pass


class InvalidSelectionError(InterfaceSelectionError):
    pass


def _usable(address: str) -> bool:
    try:
        ip = ipaddress.IPv4Address(address)
    except ValueError:
        return False
    return not (ip.is_loopback or ip.is_link_local or ip.is_unspecified)


def enumerate_interfaces() -> Dict[str, str]:
    """Вернуть отображение ``имя интерфейса -> IPv4 адрес``.

    Loopback и link-local адреса пропускаются; для интерфейса с несколькими
    адресами берётся первый подходящий.
    """
    result: Dict[str, str] = {}
    for name in netifaces.interfaces():
        try:
            addrs = netifaces.ifaddresses(name)
        except ValueError:
            logger.debug("Interface %s disappeared during enumeration", name)
            continue
        for entry in addrs.get(netifaces.AF_INET, []):
            address = entry.get("addr", "")
            if _usable(address):
                result[name] = address
                break
    return result


def sorted_candidates(ips: Mapping[str, str]) -> List[InterfaceCandidate]:
    return [InterfaceCandidate(name=name, address=ips[name]) for name in sorted(ips)]


def _parse_index(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError:
        return None


def _read_user_input(
    candidates: List[InterfaceCandidate],
    read_line: Callable[[], str],
    out: TextIO,
    result: "queue.Queue[Optional[int]]",
) -> None:
    out.write("You have more than 1 NIC, please select one.\n\n")
    for idx, cand in enumerate(candidates):
        out.write(f"{idx:2d}\t{cand.name:<16}\t{cand.address}\n")
    out.write("\n" + PROMPT)
    out.flush()
    try:
        line: Optional[str] = read_line()
    except EOFError:
        line = None
    # EOF от readline приходит пустой строкой без перевода строки
    if line == "":
        line = None
    result.put(_parse_index(line))


def select_interface(
    ips: Mapping[str, str],
    timeout: float = 5,
    read_line: Callable[[], str] | None = None,
    out: TextIO | None = None,
) -> str:
    """Выбрать ровно один адрес из ``ips``.

    :param ips: отображение имя интерфейса -> адрес.
    :param timeout: сколько секунд ждать ввода оператора.
    :param read_line: источник строки ввода (по умолчанию ``sys.stdin.readline``).
    :raises NoAddressError: если кандидатов нет.
    :raises InvalidSelectionError: если введён неверный индекс.
    """
    if not ips:
        raise NoAddressError("Can not get local ip")
    candidates = sorted_candidates(ips)
    if len(candidates) == 1:
        return candidates[0].address
    if timeout <= 0:
        logger.info("Selection disabled, using %s\t%s", candidates[0].name, candidates[0].address)
        return candidates[0].address

    read_line = read_line or sys.stdin.readline
    out = out or sys.stdout
    result: "queue.Queue[Optional[int]]" = queue.Queue(maxsize=1)
    reader = threading.Thread(
        target=_read_user_input,
        args=(candidates, read_line, out, result),
        name="nic-selector",
        daemon=True,
    )
    reader.start()

    try:
        choice = result.get(timeout=timeout)
    except queue.Empty:
        out.write("\n")
        logger.info(
            "Input timeout, using %s\t%s", candidates[0].name, candidates[0].address
        )
        return candidates[0].address

    if choice is None or not 0 <= choice < len(candidates):
        raise InvalidSelectionError("Invalid index.")
    selected = candidates[choice]
    logger.info("Using %s\t%s", selected.name, selected.address)
    return selected.address


__all__ = [
    "InterfaceSelectionError",
    "NoAddressError",
    "InvalidSelectionError",
    "enumerate_interfaces",
    "select_interface",
    "sorted_candidates",
]
