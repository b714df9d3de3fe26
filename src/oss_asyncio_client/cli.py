#!/usr/bin/env python3
"""OSS CLI using the oss-asyncio-client library."""

import asyncio
import logging
import sys

import aiohttp
import click

from .client import OSSClient
from .exceptions import OSSConfigurationError, OSSError
from .reply import Reply


def _print_headers(reply: Reply, err: bool = False):
    click.echo(f"Status: {reply.code}", err=err)
    for name, value in reply.headers.items():
        click.echo(f"{name}: {value}", err=err)


def _check(reply: Reply):
    if not reply.ok:
        _print_headers(reply, err=True)
        # raw replies leave body empty
        text = reply.body or reply.buffer.decode("utf-8", errors="replace")
        if text:
            click.echo(text, err=True)
        sys.exit(1)


@click.group()
@click.option("--access-key-id", envvar="OSS_ACCESS_KEY_ID", required=True)
@click.option("--access-key-secret", envvar="OSS_ACCESS_KEY_SECRET", required=True)
@click.option("--bucket", envvar="OSS_BUCKET", required=True)
@click.option("--endpoint", envvar="OSS_ENDPOINT", help="OSS region endpoint host")
@click.option("--prefix", envvar="OSS_PREFIX", help="Prefix added to every key")
@click.option("--cdn", envvar="OSS_CDN", help="Base URL for signed links")
@click.option("--secure/--no-secure", default=False, help="Use HTTPS")
@click.option("-v", "--verbose", is_flag=True, help="Log every request")
@click.pass_context
def cli(
    ctx, access_key_id, access_key_secret, bucket, endpoint, prefix, cdn, secure, verbose
):
    """OSS CLI - A command line interface for OSS object operations."""
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        client = OSSClient(
            access_key_id=access_key_id,
            access_key_secret=access_key_secret,
            bucket=bucket,
            endpoint=endpoint,
            prefix=prefix,
            cdn=cdn,
            secure=secure,
        )
    except OSSConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ctx.obj["client"] = client


@cli.command()
@click.argument("key")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--content-type", help="Used when the key has no known extension")
@click.option("--content-md5", help="Base64 MD5 digest of the file")
@click.pass_context
def put(ctx, key, file_path, content_type, content_md5):
    """Upload a file."""

    async def _put():
        client = ctx.obj["client"]

        with open(file_path, "rb") as f:
            data = f.read()

        async with client:
            reply = await client.put_object(
                key,
                data,
                content_type=content_type,
                filename=file_path,
                content_md5=content_md5,
            )

        _check(reply)
        click.echo("Upload successful!")
        click.echo(f"ETag: {reply.etag}")

    asyncio.run(_put())


@cli.command()
@click.argument("key")
@click.argument("output_path", type=click.Path())
@click.pass_context
def get(ctx, key, output_path):
    """Download an object."""

    async def _get():
        client = ctx.obj["client"]

        async with client:
            reply = await client.get_object(key)

        _check(reply)
        with open(output_path, "wb") as f:
            f.write(reply.buffer)

        click.echo("Download successful!")
        click.echo(f"Content Type: {reply.headers.get('Content-Type', 'N/A')}")
        click.echo(f"Content Length: {len(reply.buffer)} bytes")
        click.echo(f"ETag: {reply.etag}")

    asyncio.run(_get())


@cli.command()
@click.argument("key")
@click.pass_context
def head(ctx, key):
    """Show object headers without downloading."""

    async def _head():
        client = ctx.obj["client"]

        async with client:
            reply = await client.head_object(key)

        _check(reply)
        _print_headers(reply)

    asyncio.run(_head())


@cli.command()
@click.argument("key")
@click.pass_context
def meta(ctx, key):
    """Show object metadata."""

    async def _meta():
        client = ctx.obj["client"]

        async with client:
            reply = await client.object_meta(key)

        _check(reply)
        _print_headers(reply)

    asyncio.run(_meta())


@cli.command()
@click.argument("key")
@click.pass_context
def delete(ctx, key):
    """Delete an object."""

    async def _delete():
        client = ctx.obj["client"]

        async with client:
            reply = await client.delete_object(key)

        _check(reply)
        click.echo("Delete successful!")

    asyncio.run(_delete())


@cli.command()
@click.argument("key")
@click.option("--ttl", default=60, help="URL lifetime in seconds")
@click.pass_context
def sign_url(ctx, key, ttl):
    """Print a pre-signed GET URL."""
    client = ctx.obj["client"]
    click.echo(client.get_sign_url(key, ttl=ttl))


@cli.command()
@click.argument("key")
@click.argument("source_url")
@click.pass_context
def put_url(ctx, key, source_url):
    """Copy a remote URL into an object and print its signed URL."""

    async def _put_url():
        client = ctx.obj["client"]

        async with client:
            try:
                url = await client.put_object_with_url(key, source_url)
            except (OSSError, aiohttp.ClientError) as e:
                click.echo(f"Error: {e}", err=True)
                sys.exit(1)

        click.echo(url)

    asyncio.run(_put_url())


if __name__ == "__main__":
    cli()
