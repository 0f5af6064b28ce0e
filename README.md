# pixiu-samples

Small backend services to place behind an API gateway while trying out its
routing, canary and filtering features. Everything runs on the Python
standard library.

## Modules

- `pixiu_samples.store` – `Record` (a dataclass with `id`, `code`, `name`,
  `age`, `time`) and `RecordStore`, a thread-safe in-memory store indexing
  records by name and by code. `RecordStore.add` returns `True` only when
  the name is non-empty, the code is positive and neither is already used;
  `get_by_name` and `get_by_code` return the record or `None`. It also
  defines the errors raised by the providers: `ProviderError` and its
  subclasses `NotFoundError` ("not found"), `AlreadyExistsError`
  ("data is exist") and `AddError` ("add error").
- `pixiu_samples.users` – `User` and `UserProvider`. `seed_users()` returns
  a store with the users `tc` (id `0001`, code 1, age 18) and `ic`
  (id `0002`, code 2, age 88). The provider offers `create_user`,
  `get_user_by_name`, `get_user_by_code`, `get_user_timeout` (sleeps
  `delay` seconds, 10 by default, before looking up), `get_user_by_name_and_age`,
  `update_user`, `update_user_by_name` and `reference()`. Updates copy a
  non-empty `id` and a non-negative `age` onto the stored user.
- `pixiu_samples.school` – `Student`/`StudentProvider` and
  `Teacher`/`TeacherProvider` with the same operations, seeded by
  `seed_students()` (`tc-student`, `ic-student`) and `seed_teachers()`
  (`tc-teacher`, `ic-teacher`).
- `pixiu_samples.provider_app` – builds the providers of a sample
  application (`build_providers`), can post a namespace to a Nacos console
  (`nacos_namespace_form`, `create_nacos_namespace`) and waits for a
  termination signal with `ShutdownWatcher`. SIGHUP is logged and ignored;
  any other watched signal ends the wait and arms a timer that forces the
  process to exit after the survival timeout.
- `pixiu_samples.http_samples` – a small path `Router` (exact patterns, and
  subtree patterns ending in `/`, longest wins; unknown paths give 404 and a
  missing trailing slash on a subtree gives a 301 redirect) and routers for
  the samples:
  - `build_message_router(server=None)` answers `/user`, `/user/pixiu`,
    `/prefix` and `/health` with `{"message":"<last segment>","status":200}`,
    or with a `"server"` field first when a server tag is given;
  - `build_csrf_router()` answers `/login/` with `tokenize(secret, key)`
    from the query and `/user/` with a success message;
  - `build_jwt_router()` is the message router plus a JWKS document on
    `/remote`.
  `make_server` wraps a router in a `ThreadingHTTPServer` without starting it.

## Installing

```
pip install .
```

## Commands

```
pixiu-provider [bestdo|body|multi|nacos] [--nacos-url URL] [--namespace NAME] [--survival-timeout SECONDS]
pixiu-http-sample [csrf|jwt|prometheus|traffic|v1|v2|v3] [--host HOST] [--port PORT]
```

`pixiu-provider` builds the providers of the chosen application (`multi`
gives the student and teacher providers, the others the user provider),
first creating the namespace when the application is `nacos`, and then waits
for a termination signal.

`pixiu-http-sample` serves one sample until interrupted. `v1`, `v2` and `v3`
tag their answers with that server name and listen on ports 1315, 1316 and
1317; the others listen on 1314.

## Using the pieces from Python

```python
from pixiu_samples.http_samples import build_message_router, route_message, tokenize

route_message("/user/pixiu")   # "pixiu"
tokenize("secret", "salt")     # "c2FsdC1zZWNyZXQ=" (URL-safe base64 of "salt-secret")

status, headers, body = build_message_router("v1").dispatch("/user")
# 200, b'{"server": "v1","message":"user","status":200}'
```

## What this package does not do

The providers are plain Python objects. `pixiu-provider` creates them but
does not expose them over any RPC protocol or network port and registers
nothing with a service registry; callers use the providers in-process. There
is no streaming greeter service and no tracing or metrics export.

## Running the tests

```
pip install .[test]
pytest
```