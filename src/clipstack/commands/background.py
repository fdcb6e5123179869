import typer

from clipstack.clipboard import Clipboard
from clipstack.daemon import Daemon
from clipstack.historystore import Storage
from clipstack.server import ClipServer


def daemon(storage: Storage, clipboard: Clipboard, interval: float) -> None:
    runner = Daemon(storage, clipboard, poll_interval=interval)
    typer.echo("clipstack daemon started, monitoring clipboard + primary selection...", err=True)
    try:
        runner.run()
    except KeyboardInterrupt:
        runner.stop()
    typer.echo("clipstack daemon stopped", err=True)


def serve(storage: Storage, clipboard: Clipboard, port: int) -> None:
    with ClipServer(storage, clipboard, port) as server:
        typer.echo(f"Clipboard server listening on 127.0.0.1:{port}", err=True)
        typer.echo(f"SSH usage: ssh -R {port}:localhost:{port} remote", err=True)
        typer.echo(f"Remote usage: cat file | nc localhost {port}", err=True)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
