from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

import httpx

DEFAULT_BASE_URL = os.getenv("PINMAP_BASE_URL", "http://127.0.0.1:8000")


def _print_json(data: Any, pretty: bool = True) -> None:
    if pretty:
        print(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=False))
    else:
        print(json.dumps(data, ensure_ascii=False))


def _request(
    method: str,
    url: str,
    *,
    json_body: Any | None = None,
    params: dict | None = None,
    timeout: float = 5.0,
) -> Any:
    headers = {"accept": "application/json"}
    if json_body is not None:
        headers["content-type"] = "application/json"

    try:
        with httpx.Client(timeout=timeout) as client:
            resp = client.request(method, url, headers=headers, json=json_body, params=params)
    except httpx.RequestError as e:
        raise RuntimeError(f"Request failed: {e}") from e

    content_type = resp.headers.get("content-type", "")
    if "application/json" in content_type:
        payload: Any = resp.json()
    else:
        payload = resp.text

    if resp.status_code >= 400:
        raise RuntimeError(f"HTTP {resp.status_code} error: {payload}")

    return payload


def _normalize_base_url(base_url: str) -> str:
    return base_url.rstrip("/")


# -------------------------
# Command implementations
# -------------------------
def cmd_presets(args: argparse.Namespace) -> Any:
    base = _normalize_base_url(args.base_url)
    url = f"{base}/api/presets"

    if args.action == "list":
        presets = _request("GET", url, timeout=args.timeout)
        if args.brief:
            return [
                {"id": p.get("id"), "name": p.get("name"), "mappings": len(p.get("mappings") or [])} for p in presets
            ]
        return presets

    if args.action == "export":
        presets = _request("GET", f"{url}/export", timeout=args.timeout)
        if args.out:
            Path(args.out).write_text(json.dumps(presets, ensure_ascii=False, indent=2), encoding="utf-8")
            return {"exported": len(presets), "file": args.out}
        return presets

    if args.action == "import":
        document = json.loads(Path(args.file).read_text(encoding="utf-8"))
        return _request("POST", f"{url}/import", json_body=document, timeout=args.timeout)

    if args.action == "delete":
        return _request("DELETE", url, params={"id": args.preset_id}, timeout=args.timeout)

    raise RuntimeError(f"Unknown presets action: {args.action}")


def cmd_workspace(args: argparse.Namespace) -> Any:
    base = _normalize_base_url(args.base_url)
    url = f"{base}/api/workspace"

    if args.action == "show":
        return _request("GET", url, timeout=args.timeout)

    if args.action == "reset":
        return _request("DELETE", url, timeout=args.timeout)

    if args.action == "connector":
        body = {"pin_count": args.pin_count, "name": args.name}
        return _request("POST", f"{url}/connectors/{args.side}", json_body=body, timeout=args.timeout)

    if args.action == "connect":
        body = {"esc_pin": args.esc_pin, "fc_pin": args.fc_pin}
        return _request("POST", f"{url}/mappings", json_body=body, timeout=args.timeout)

    if args.action == "flip":
        return _request("POST", f"{url}/connectors/{args.side}/flip", timeout=args.timeout)

    if args.action == "automap":
        return _request("POST", f"{url}/automap", timeout=args.timeout)

    if args.action == "load":
        return _request("POST", f"{url}/load/{args.preset_id}", timeout=args.timeout)

    if args.action == "save":
        body = {"name": args.name, "description": args.description}
        return _request("POST", f"{url}/save", json_body=body, timeout=args.timeout)

    if args.action == "share":
        return _request("GET", f"{url}/share", timeout=args.timeout)

    if args.action == "open":
        return _request("POST", f"{url}/share", json_body={"encoded": args.encoded}, timeout=args.timeout)

    raise RuntimeError(f"Unknown workspace action: {args.action}")


def cmd_share(args: argparse.Namespace) -> Any:
    base = _normalize_base_url(args.base_url)

    if args.action == "decode":
        return _request("GET", f"{base}/api/share/decode", params={"s": args.encoded}, timeout=args.timeout)

    raise RuntimeError(f"Unknown share action: {args.action}")


# -------------------------
# CLI parser
# -------------------------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pinmapctl",
        description="ESC/FC pin mapper operations (API wrapper).",
    )

    p.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help="Base URL of the pin mapper API (default: $PINMAP_BASE_URL or http://127.0.0.1:8000)",
    )
    p.add_argument("--timeout", type=float, default=5.0, help="HTTP timeout seconds (default: 5)")
    p.add_argument("--raw", action="store_true", help="Print raw JSON without pretty formatting")

    sub = p.add_subparsers(dest="cmd", required=True)

    # presets
    pre = sub.add_parser("presets", help="Preset store APIs")
    pre_sub = pre.add_subparsers(dest="action", required=True)

    pre_list = pre_sub.add_parser("list", help="GET /api/presets")
    pre_list.add_argument("--brief", action="store_true", help="Only id, name and mapping count")

    pre_export = pre_sub.add_parser("export", help="GET /api/presets/export")
    pre_export.add_argument("--out", help="Write the export document to this file")

    pre_import = pre_sub.add_parser("import", help="POST /api/presets/import")
    pre_import.add_argument("file")

    pre_delete = pre_sub.add_parser("delete", help="DELETE /api/presets?id=")
    pre_delete.add_argument("preset_id")

    # workspace
    ws = sub.add_parser("workspace", help="Mapping session APIs")
    ws_sub = ws.add_subparsers(dest="action", required=True)

    ws_sub.add_parser("show", help="GET /api/workspace")
    ws_sub.add_parser("reset", help="DELETE /api/workspace")
    ws_sub.add_parser("automap", help="POST /api/workspace/automap")
    ws_sub.add_parser("share", help="GET /api/workspace/share")

    ws_conn = ws_sub.add_parser("connector", help="POST /api/workspace/connectors/{side}")
    ws_conn.add_argument("side", choices=["esc", "fc"])
    ws_conn.add_argument("pin_count", type=int)
    ws_conn.add_argument("--name")

    ws_flip = ws_sub.add_parser("flip", help="POST /api/workspace/connectors/{side}/flip")
    ws_flip.add_argument("side", choices=["esc", "fc"])

    ws_map = ws_sub.add_parser("connect", help="POST /api/workspace/mappings")
    ws_map.add_argument("esc_pin", type=int)
    ws_map.add_argument("fc_pin", type=int)

    ws_load = ws_sub.add_parser("load", help="POST /api/workspace/load/{preset_id}")
    ws_load.add_argument("preset_id")

    ws_save = ws_sub.add_parser("save", help="POST /api/workspace/save")
    ws_save.add_argument("--name")
    ws_save.add_argument("--description")

    ws_open = ws_sub.add_parser("open", help="POST /api/workspace/share")
    ws_open.add_argument("encoded")

    # share
    sh = sub.add_parser("share", help="Stateless share-string APIs")
    sh_sub = sh.add_subparsers(dest="action", required=True)

    sh_decode = sh_sub.add_parser("decode", help="GET /api/share/decode?s=")
    sh_decode.add_argument("encoded")

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.cmd == "presets":
            result = cmd_presets(args)
        elif args.cmd == "workspace":
            result = cmd_workspace(args)
        elif args.cmd == "share":
            result = cmd_share(args)
        else:
            raise RuntimeError(f"Unknown command: {args.cmd}")

        _print_json(result, pretty=not args.raw)
        return 0

    except Exception as e:
        base = _normalize_base_url(getattr(args, "base_url", DEFAULT_BASE_URL))
        print(f"[ERROR] base_url={base} - {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
