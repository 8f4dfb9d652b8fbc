# linkcut

Building blocks for a URL shortening service: configuration read from
the environment, PostgreSQL storage through SQLAlchemy, a Redis cache for
resolved links, random hash generation, and a Flask application that
serves a JSON HTTP API.

## Installation

```
pip install .
```

`linkcut.database.connect_database` creates a SQLAlchemy engine for a
`postgresql://` URL, so a PostgreSQL driver for SQLAlchemy (such as
psycopg2) must be installed alongside the package.

## What the package does not do

The package has no command-line entry point and no ready-made server
launcher. It does not set up log files. You put the pieces together
yourself and run the Flask application with whatever WSGI server you
prefer. The "Wiring it up" section below shows how.

## Configuration

`linkcut.config.load_config(environ=None)` reads these variables from
`os.environ` or from the mapping you pass in. It returns a frozen
`Config` with `database`, `app`, `redis` and `hash` sections. An integer
variable that is missing or is not a whole number falls back to its
default.

| Variable             | Setting                          | Default |
|----------------------|----------------------------------|---------|
| `APP_RETRY_INTERVAL` | `app.retry_interval` (seconds)   | `5`     |
| `DB_USER`            | `database.user`                  | `""`    |
| `DB_PASSWORD`        | `database.password`              | `""`    |
| `DB_HOST`            | `database.host`                  | `""`    |
| `DB_PORT`            | `database.port`                  | `5432`  |
| `DB_NAME`            | `database.name`                  | `""`    |
| `DB_SSLMODE`         | `database.sslmode`               | `""`    |
| `REDIS_HOST`         | `redis.host`                     | `""`    |
| `REDIS_PORT`         | `redis.port`                     | `6379`  |
| `HASH_CHARSET`       | `hash.charset`                   | `""`    |
| `HASH_LENGTH`        | `hash.length`                    | `6`     |

`load_database_config`, `load_redis_config` and `load_hash_config` read
one section each.

`HASH_CHARSET` must be set. `HashGenerator.generate` raises `ValueError`
when the charset is empty and the length is positive.

## Wiring it up

```python
import logging

from linkcut.cache import RedisCacher, connect_redis
from linkcut.config import load_config
from linkcut.database import connect_database
from linkcut.hashgen import HashGenerator
from linkcut.repository import LinkRepository
from linkcut.service import LinkService
from linkcut.web import create_app

cfg = load_config()
engine = connect_database(
    cfg.database.user,
    cfg.database.password,
    cfg.database.host,
    cfg.database.port,
    cfg.database.name,
    cfg.database.sslmode,
    cfg.app.retry_interval,
)
cache = RedisCacher(connect_redis(cfg.redis.host, cfg.redis.port, cfg.app.retry_interval))
service = LinkService(
    LinkRepository(engine),
    HashGenerator(cfg.hash.charset, cfg.hash.length),
    cache,
)
app = create_app(service, logging.getLogger("linkcut.requests"))
app.run()
```

`connect_database` and `connect_redis` block until they can connect.
They retry every `retry_interval` seconds and log each failed attempt.
`connect_redis` uses `localhost` when the host is empty.
`linkcut.database.build_dsn` returns the `postgres://` URL that is built
from the settings.

The database must already have a `links` table with the columns `id`,
`hash`, `url` and `expires_at`. The package does not create it.

## API

All routes live under `/api`. Before each request, the logger given to
`create_app` records a `Request` message. The message carries `method`,
`path` (the matched route pattern) and `ip` as extra fields.

### `POST /api/links/cut`

Creates a short link. Both fields are required and must be non-zero:

```json
{"link": "https://example.com/some/long/path", "ttl": 3600}
```

`ttl` is the lifetime in seconds, counted from now. The response is
`200` with `{"new_hash": "..."}`. A malformed body gives `400` with
`{"msg": "Invalid request body"}`. A failure while generating or storing
the link gives `500` with `{"msg": "Error while generating hash"}`.

### `GET /api/links/r/<hash>`

Redirects to the stored URL with `307 Temporary Redirect`. The response
depends on the hash:

- An unknown hash gives `404` with `{"msg": "Link not found"}`.
- An expired link gives `410` with `{"msg": "Link expired"}`.
- Any other failure gives `500` with `{"msg": "Unknown error"}`.

Lookups check the cache first. A link found in the database is cached
for its remaining lifetime.

### `GET /api/service/health`

Returns `{"msg": "Healthy"}`.

## Using other components

`create_app(link_service, logger)` in `linkcut.web` accepts any
`LinkService`. A `LinkService` takes:

- a repository with `add(link)` and `get_by_hash(hash_)`;
- a `linkcut.hashgen.Generator`;
- a `linkcut.cache.Cacher`.

This lets you plug in other storage, caches or hash generators, for
example in tests. `register_routes` attaches the routes and the logging
hook to an existing Flask application.