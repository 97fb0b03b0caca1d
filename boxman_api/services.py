#!/usr/bin/env python3
"""
Host üzerindeki aktif systemd servislerini listeler.

    systemctl list-units --type=service --state=active

çıktısını satır satır okuyup ServiceRecord listesine çevirir.

- CLI:
    python -m boxman_api.services [filtre]

- API (FastAPI router):
    /services?name=<filtre>
"""

import json
import logging
import subprocess
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException

from .config import load_cfg, setup_logging
from .errors import ServiceListError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["services"])

HEADER_TOKEN = "UNIT"
UNIT_DIR = "/etc/systemd/system"
LIST_ARGS = ["list-units", "--type=service", "--state=active"]


@dataclass(frozen=True)
class ServiceRecord:
    name: str
    unit_file: str
    active_state: str
    sub_state: str
    load_state: str
    path: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "unitFile": self.unit_file,
            "activeState": self.active_state,
            "subState": self.sub_state,
            "loadState": self.load_state,
            "path": self.path,
        }


def unit_path(name: str) -> str:
    return f"{UNIT_DIR}/{name}.service"


def parse_units(output: str, name_filter: str = "") -> List[ServiceRecord]:
    """
    list-units çıktısını kayıtlara çevirir.

    - "UNIT" ile başlayan başlık satırı atlanır
    - 3'ten az alanı olan satırlar sessizce atlanır
    - name_filter boş değilse sadece adında geçenler döner
    """
    records: List[ServiceRecord] = []

    for line in output.splitlines():
        if line.startswith(HEADER_TOKEN):
            continue

        fields = line.split()
        if len(fields) < 3:
            if line.strip():
                logger.debug("Atlanan satır: %r", line)
            continue

        name = fields[0]
        if name_filter and name_filter not in name:
            continue

        records.append(
            ServiceRecord(
                name=name,
                unit_file=fields[1],
                active_state=fields[2],
                sub_state=fields[3] if len(fields) > 3 else "",
                load_state=fields[4] if len(fields) > 4 else "",
                path=unit_path(name),
            )
        )

    return records


def _run_list_units(systemctl: str, timeout: Optional[float]) -> str:
    cmd = [systemctl, *LIST_ARGS]
    try:
        res = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise ServiceListError(f"{systemctl} {timeout}s içinde bitmedi") from exc
    except OSError as exc:
        raise ServiceListError(f"{systemctl} çalıştırılamadı: {exc}") from exc

    if res.returncode != 0:
        msg = (res.stdout or "").strip()
        raise ServiceListError(
            f"{systemctl} {res.returncode} koduyla çıktı: {msg or 'çıktı yok'}"
        )
    return res.stdout or ""


def list_services(name_filter: str = "") -> List[ServiceRecord]:
    """
    Aktif servisleri döner. Komut hata verirse ServiceListError fırlatır,
    kısmi sonuç dönmez.
    """
    cfg = load_cfg()
    output = _run_list_units(str(cfg["systemctl_bin"]), float(cfg["list_timeout_secs"]))
    records = parse_units(output, name_filter)
    logger.debug("%d servis listelendi (filtre=%r)", len(records), name_filter)
    return records


@router.get("/services")
def get_services(name: str = ""):
    """
    API endpoint: GET /services?name=<filtre>
    """
    try:
        return [r.to_dict() for r in list_services(name)]
    except ServiceListError as exc:
        logger.error("Servis listesi alınamadı: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entrypoint: JSON çıktıyı stdout'a basar.
    """
    setup_logging()
    args = sys.argv[1:] if argv is None else argv
    name_filter = args[0] if args else ""
    try:
        data = [r.to_dict() for r in list_services(name_filter)]
    except ServiceListError as exc:
        logger.error("%s", exc)
        return 1
    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
