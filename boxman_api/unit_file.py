#!/usr/bin/env python3
"""
systemd unit dosyası üretir ([Unit] / [Service] / [Install]).

- CLI:
    python -m boxman_api.unit_file pocketbase ~/pb "pocketbase serve yourdomain.com" --user pocketbase

- API (FastAPI router):
    GET  /new           -> örnek unit
    POST /service/new   -> form: name, path
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Form, HTTPException
from fastapi.responses import PlainTextResponse

from .config import load_cfg, setup_logging
from .errors import HomeDirectoryError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["unit-file"])

HOME_PREFIX = "~/"
SAVE_DIR = "/lib/systemd/system"
INSTALL_TARGET = "multi-user.target"


@dataclass(frozen=True)
class ConfigOverrides:
    service_type: Optional[str] = None
    user: Optional[str] = None
    group: Optional[str] = None
    file_descriptor_limit: Optional[int] = None
    restart_policy: Optional[str] = None
    restart_delay: Optional[str] = None


DEFAULT_OVERRIDES = ConfigOverrides(
    service_type="simple",
    user="root",
    group="root",
    file_descriptor_limit=4096,
    restart_policy="always",
    restart_delay="5s",
)


@dataclass(frozen=True)
class UnitConfig:
    # [Unit]
    description: str
    # [Service]
    service_type: str
    user: str
    group: str
    file_descriptor_limit: int
    restart_policy: str
    restart_delay: str
    stdout_target: str
    stderr_target: str
    exec_path: str
    # [Install]
    install_target: str
    # unit dosyasının yazılacağı yer (üretilir, yazılmaz)
    save_path: str = ""


def merge_overrides(overrides: Optional[ConfigOverrides]) -> ConfigOverrides:
    """Verilmeyen (None veya boş) alanları varsayılanlarla doldurur."""
    if overrides is None:
        return DEFAULT_OVERRIDES
    given = {
        f.name: getattr(overrides, f.name)
        for f in fields(ConfigOverrides)
        if getattr(overrides, f.name) not in (None, "")
    }
    return replace(DEFAULT_OVERRIDES, **given)


def join_under(base: str, part: str) -> str:
    """base altına ekler; part "/" ile başlasa da base atılmaz, sonuç normalize edilir."""
    return os.path.normpath(os.path.join(base, part.lstrip(os.sep)))


def expand_home(base_dir: str) -> str:
    if not base_dir.startswith(HOME_PREFIX):
        return base_dir
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise HomeDirectoryError(f"Ev dizini bulunamadı ({base_dir}): {exc}") from exc
    return join_under(str(home), base_dir[len(HOME_PREFIX):])


def build_unit_config(
    service_name: str,
    base_dir: str,
    exec_command: str,
    overrides: Optional[ConfigOverrides] = None,
) -> UnitConfig:
    """
    Servis adı, taban dizin ve çalıştırılacak komuttan UnitConfig üretir.

    base_dir "~/" ile başlıyorsa ev dizinine açılır, sonra mutlak ve
    normalize edilmiş yola çevrilir. Loglar base_dir/logs/service.log'a
    eklenir, ExecStart = base_dir/exec_command.
    """
    opts = merge_overrides(overrides)

    base = os.path.abspath(expand_home(base_dir))
    log_path = os.path.join(base, "logs", "service.log")
    exec_path = join_under(base, exec_command)

    config = UnitConfig(
        description=f"{service_name} service",
        service_type=opts.service_type,
        user=opts.user,
        group=opts.group,
        file_descriptor_limit=int(opts.file_descriptor_limit),
        restart_policy=opts.restart_policy,
        restart_delay=opts.restart_delay,
        stdout_target="append:" + log_path,
        stderr_target="append:" + log_path,
        exec_path=exec_path,
        install_target=INSTALL_TARGET,
        save_path=os.path.join(SAVE_DIR, f"{service_name}.service"),
    )
    logger.info("Unit oluşturuldu: %s -> %s", service_name, config.save_path)
    return config


def render_unit(config: UnitConfig) -> str:
    sections = [
        ("Unit", [
            ("Description", config.description),
        ]),
        ("Service", [
            ("Type", config.service_type),
            ("User", config.user),
            ("Group", config.group),
            ("LimitNOFILE", config.file_descriptor_limit),
            ("Restart", config.restart_policy),
            ("RestartSec", config.restart_delay),
            ("StandardOutput", config.stdout_target),
            ("StandardError", config.stderr_target),
            ("ExecStart", config.exec_path),
        ]),
        ("Install", [
            ("WantedBy", config.install_target),
        ]),
    ]

    blocks = []
    for title, items in sections:
        lines = [f"[{title}]"] + [f"{key}={value}" for key, value in items]
        blocks.append("\n".join(lines) + "\n")
    return "\n".join(blocks)


def example_config() -> UnitConfig:
    ex = load_cfg()["example"]
    return build_unit_config(
        ex["name"],
        ex["base_dir"],
        ex["exec"],
        ConfigOverrides(user=ex.get("user"), group=ex.get("group")),
    )


def _render_example() -> PlainTextResponse:
    try:
        text = render_unit(example_config())
    except HomeDirectoryError as exc:
        logger.error("%s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return PlainTextResponse(text)


@router.get("/new", response_class=PlainTextResponse)
def new_unit():
    """
    API endpoint: GET /new  (örnek pocketbase unit'i)
    """
    return _render_example()


@router.post("/service/new", response_class=PlainTextResponse)
def new_service(name: Optional[str] = Form(None), path: Optional[str] = Form(None)):
    """
    API endpoint: POST /service/new

    name ve path doğrulanır; çıktı şimdilik yine örnek unit'tir.
    """
    if not name:
        return PlainTextResponse("name is required", status_code=400)
    if not path:
        return PlainTextResponse("path is required", status_code=400)

    path = path.strip()
    if not path.startswith(HOME_PREFIX):
        return PlainTextResponse("path must be absolute, try ~/path/to/service", status_code=400)

    return _render_example()


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entrypoint: unit dosyasını stdout'a basar.
    """
    setup_logging()
    p = argparse.ArgumentParser(prog="boxman-unit", description="systemd unit dosyası üret")
    p.add_argument("name")
    p.add_argument("base_dir")
    p.add_argument("exec_command")
    p.add_argument("--type", dest="service_type")
    p.add_argument("--user")
    p.add_argument("--group")
    p.add_argument("--limit", dest="file_descriptor_limit", type=int)
    p.add_argument("--restart", dest="restart_policy")
    p.add_argument("--restart-sec", dest="restart_delay")
    args = p.parse_args(argv)

    overrides = ConfigOverrides(
        service_type=args.service_type,
        user=args.user,
        group=args.group,
        file_descriptor_limit=args.file_descriptor_limit,
        restart_policy=args.restart_policy,
        restart_delay=args.restart_delay,
    )
    try:
        config = build_unit_config(args.name, args.base_dir, args.exec_command, overrides)
    except HomeDirectoryError as exc:
        logger.error("%s", exc)
        return 1
    sys.stdout.write(render_unit(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
