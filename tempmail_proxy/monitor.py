# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
"""Terminal monitor that polls a running server's /api/health and /api/memory."""

import time
from datetime import datetime

import requests
import typer
from rich.console import Console
from rich.theme import Theme
from typing_extensions import Annotated

HEALTH_INTERVAL = 30
MEMORY_INTERVAL = 300

console = Console(theme=Theme({
    "ok": "green",
    "warn": "yellow",
    "bad": "bold red",
    "stamp": "blue",
}))

app = typer.Typer(name="tempmail-monitor", help="Watch a TempMail proxy server.", add_completion=False)


def memory_style(rss_mb):
    if rss_mb > 400:
        return "bad"
    if rss_mb > 300:
        return "warn"
    return "ok"


def session_style(active, maximum):
    return "warn" if active > maximum * 0.8 else "ok"


def format_health(data):
    stamp = datetime.now().strftime('%H:%M:%S')
    rss = data['memory']['rss']
    status_style = "ok" if data.get('status') == 'healthy' else "warn"
    lines = [
        f"[stamp][{stamp}][/stamp] Server Status: [{status_style}]{data.get('status')}[/{status_style}]",
        f"  Memory: [{memory_style(rss)}]{rss}MB[/{memory_style(rss)}] (Threshold: {data.get('threshold')}MB)",
        f"  Sessions: [{session_style(data['activeSessions'], data['maxSessions'])}]"
        f"{data['activeSessions']}/{data['maxSessions']}[/]",
        f"  Uptime: {int(data.get('uptime', 0) // 60)} minutes",
        "  [bad]HIGH MEMORY USAGE[/bad]" if data.get('isHigh') else "  [ok]Normal operation[/ok]",
    ]
    return "\n".join(lines)


def format_memory(data):
    stamp = datetime.now().strftime('%H:%M:%S')
    mem = data['memory']
    return "\n".join([
        f"[stamp][{stamp}][/stamp] Memory Details:",
        f"  RSS: {mem['rss']}MB",
        f"  Heap Used: {mem['heapUsed']}MB",
        f"  Heap Total: {mem['heapTotal']}MB",
        f"  External: {mem['external']}MB",
        f"  Active Sessions: {data['activeSessions']}/{data['maxSessions']}",
        f"  Memory High: {'[bad]YES[/bad]' if data.get('isHigh') else '[ok]No[/ok]'}",
    ])


def _fetch(base_url, path):
    response = requests.get(f"{base_url.rstrip('/')}{path}", timeout=10)
    response.raise_for_status()
    return response.json()


def check_health(base_url):
    try:
        console.print(format_health(_fetch(base_url, '/api/health')))
    except (requests.RequestException, KeyError, ValueError) as e:
        console.print(f"[bad]Error checking health: {e}[/bad]")
    console.print()


def check_memory(base_url):
    try:
        console.print(format_memory(_fetch(base_url, '/api/memory')))
    except (requests.RequestException, KeyError, ValueError) as e:
        console.print(f"[bad]Error checking memory: {e}[/bad]")
    console.print()


@app.command()
def watch(
    base_url: Annotated[str, typer.Option("--base-url", "-u", envvar="BASE_URL", help="Server to monitor.")] = "http://localhost:5000",
    once: Annotated[bool, typer.Option("--once", help="Run one health and memory check, then exit.")] = False,
):
    """Poll health every 30 seconds and memory details every 5 minutes."""
    if once:
        check_health(base_url)
        check_memory(base_url)
        return
    console.print(f"Starting TempMail monitoring for {base_url}")
    console.print(f"Checking every {HEALTH_INTERVAL} seconds...\n")
    check_health(base_url)
    last_memory = time.monotonic()
    try:
        while True:
            time.sleep(HEALTH_INTERVAL)
            check_health(base_url)
            if time.monotonic() - last_memory >= MEMORY_INTERVAL:
                check_memory(base_url)
                last_memory = time.monotonic()
    except KeyboardInterrupt:
        console.print("\nMonitoring stopped")


def main():
    app()


if __name__ == "__main__":
    main()
