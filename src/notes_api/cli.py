# cli.py
import asyncio
import logging
import mimetypes
from pathlib import Path

import click

from notes_api.adapters.factory import build_adapter, build_kv_store
from notes_api.config.settings import get_settings
from notes_api.formatting import format_date, format_file_size
from notes_api.schemas import IncomingFile
from notes_api.theme import ThemeToggle

# Configure logging
logger = logging.getLogger(__name__)


def _load_editor():
    settings = get_settings()
    editor = build_adapter(settings)
    asyncio.run(editor.load_all())
    return settings, editor


@click.group()
def cli():
    """CLI commands for the Notes API and its stores"""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  Deployment Mode: {settings.deployment_mode}")
    print(f"  Storage Backend: {settings.storage_backend}")
    if settings.storage_backend == "remote":
        print(f"  Row Store: {settings.row_store}")
        print(f"  Blob Store: {settings.blob_store}")
        if settings.blob_store == "s3":
            print(f"  S3 Bucket: {settings.s3_bucket_name}")
            print(f"  AWS Endpoint: {settings.aws_endpoint_url}")
        if "supabase" in (settings.row_store, settings.blob_store):
            print(f"  Supabase URL: {settings.supabase_url}")
    else:
        print(f"  Key-Value Store: {settings.kv_db_path}")


@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", default=8000, type=int, help="Port to listen on")
def serve(host, port):
    """Run the API and the editor page"""
    import uvicorn
    from notes_api.main import create_app

    uvicorn.run(create_app(get_settings()), host=host, port=port)


@cli.command()
def messages():
    """List saved messages, newest first"""
    settings, editor = _load_editor()
    if not editor.messages:
        print("No saved messages")
    for message in editor.messages:
        print(f"[{format_date(message.created_at, settings.date_locale)}] {message.id}")
        print(f"  {message.content}")


@cli.command()
@click.argument("text")
def save(text):
    """Save TEXT as a new message"""
    _, editor = _load_editor()
    message = asyncio.run(editor.save_message(text))
    if message is None:
        print("Nothing saved")
    else:
        print(f"✅ Saved message {message.id}")


@cli.command()
@click.argument("message_id")
def delete_message(message_id):
    """Delete one message by id"""
    _, editor = _load_editor()
    if asyncio.run(editor.delete_message(message_id)):
        print(f"✅ Deleted message {message_id}")
    else:
        print(f"❌ Could not delete message {message_id}")


@cli.command()
def delete_all_messages():
    """Delete every message after confirmation"""
    _, editor = _load_editor()
    confirm = lambda: click.confirm(f"Delete all {len(editor.messages)} messages?")
    if asyncio.run(editor.delete_all_messages(confirm)):
        print("✅ All messages deleted")
    else:
        print("Nothing deleted")


@cli.command()
def files():
    """List uploaded files, newest first"""
    settings, editor = _load_editor()
    if not editor.files:
        print("No uploaded files")
    for item in editor.files:
        when = format_date(item.created_at, settings.date_locale)
        print(f"[{when}] {item.id}  {item.name}  {format_file_size(item.size)}")


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
def upload(paths):
    """Upload one or more files, in the order given"""
    _, editor = _load_editor()
    incoming = [
        IncomingFile(
            name=path.name,
            content_type=mimetypes.guess_type(path.name)[0] or "",
            data=path.read_bytes(),
        )
        for path in paths
    ]
    created = asyncio.run(editor.upload_files(incoming))
    print(f"Uploaded {len(created)} of {len(incoming)} file(s)")
    for item in created:
        print(f"  {item.name} -> {item.url if not item.url.startswith('data:') else 'stored inline'}")


@cli.command()
@click.argument("file_id")
def delete_file(file_id):
    """Delete one file and its stored payload"""
    _, editor = _load_editor()
    if asyncio.run(editor.delete_file(file_id)):
        print(f"✅ Deleted file {file_id}")
    else:
        print(f"❌ Could not delete file {file_id}")


@cli.command()
def delete_all_files():
    """Delete every file after confirmation"""
    _, editor = _load_editor()
    confirm = lambda: click.confirm(f"Delete all {len(editor.files)} files?")
    if asyncio.run(editor.delete_all_files(confirm)):
        print("✅ All files deleted")
    else:
        print("Nothing deleted")


@cli.command()
@click.option("--toggle", is_flag=True, help="Switch between light and dark")
def theme(toggle):
    """Show or switch the page theme"""
    settings = get_settings()
    theme_toggle = ThemeToggle(build_kv_store(settings), key=settings.theme_key)
    if toggle:
        theme_toggle.toggle()
    print("dark" if theme_toggle.is_dark else "light")


if __name__ == "__main__":
    cli()
