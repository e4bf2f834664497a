import base64
import binascii
import mimetypes
import os
import re
import shutil
import time
import uuid
from contextlib import contextmanager
from flask import current_app, has_request_context, request
from werkzeug.utils import secure_filename
from showcase.errors import ValidationError

IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg'}
VIDEO_EXTENSIONS = {'mp4', 'mov', 'avi', 'webm'}
ALLOWED_EXTENSIONS = IMAGE_EXTENSIONS | VIDEO_EXTENSIONS

MEDIA_FOLDERS = {"image": "images", "video": "videos"}

DATA_URI_RE = re.compile(r"^data:(?P<mimetype>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.+)$", re.DOTALL)


def file_extension(filename):
    filename = secure_filename(filename or "")
    if '.' not in filename:
        return None
    return filename.rsplit('.', 1)[1].lower()


def allowed_file(filename):
    return file_extension(filename) in ALLOWED_EXTENSIONS


def media_kind(mimetype, extension):
    """Return "image" or "video" for an upload, preferring its mimetype."""
    mimetype = (mimetype or "").lower()
    if mimetype.startswith("image/"):
        return "image"
    if mimetype.startswith("video/"):
        return "video"
    if extension in IMAGE_EXTENSIONS:
        return "image"
    if extension in VIDEO_EXTENSIONS:
        return "video"
    raise ValidationError("File type not allowed")


def generate_filename(extension):
    # Millisecond timestamp plus a random suffix for same-millisecond uploads
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{extension}"


def _url_prefix():
    return current_app.config.get("MEDIA_URL_PREFIX", "/media").rstrip("/")


def _media_root():
    return os.path.abspath(current_app.config["MEDIA_ROOT"])


def _write(kind, extension, writer):
    folder = MEDIA_FOLDERS[kind]
    target_dir = os.path.join(_media_root(), folder)
    os.makedirs(target_dir, exist_ok=True)

    filename = generate_filename(extension)
    writer(os.path.join(target_dir, filename))

    return f"{_url_prefix()}/{folder}/{filename}"


def save_file(file, expected_kind=None):
    """
    Store an uploaded FileStorage under the images/ or videos/ folder.
    Returns the relative media path to persist on the owning row.
    """
    if not file or not file.filename:
        raise ValidationError("No file received")

    if not allowed_file(file.filename):
        raise ValidationError("File type not allowed")

    extension = file_extension(file.filename)
    kind = media_kind(file.mimetype, extension)

    if expected_kind and kind != expected_kind:
        raise ValidationError(f"Uploaded file is not a valid {expected_kind}")

    return _write(kind, extension, file.save)


def save_data_uri(value):
    """Decode a base64 ``data:`` URI into a stored image file."""
    match = DATA_URI_RE.match(value.strip())
    if not match:
        raise ValidationError("Invalid data URI")

    mimetype = match.group("mimetype").lower()
    if not mimetype.startswith("image/"):
        raise ValidationError("Only image data URIs are accepted")

    guessed = mimetypes.guess_extension(mimetype) or ""
    extension = guessed.lstrip(".").lower()
    if extension == "jpe":
        extension = "jpg"
    if extension not in IMAGE_EXTENSIONS:
        raise ValidationError("File type not allowed")

    try:
        content = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Invalid data URI") from exc

    def writer(path):
        with open(path, "wb") as fh:
            fh.write(content)

    return _write("image", extension, writer)


def copy_media(media_path, expected_kind=None):
    """
    Duplicate an already stored file under a fresh name.
    Each row owns its own file, so deleting one row never breaks another.
    """
    source = local_path(media_path)
    if source is None or not os.path.isfile(source):
        raise ValidationError("Media reference must point to an uploaded file")

    extension = file_extension(os.path.basename(source))
    folder = media_path[len(_url_prefix()) + 1:].split("/", 1)[0]
    kind = next((k for k, f in MEDIA_FOLDERS.items() if f == folder), None)
    if kind is None or extension not in ALLOWED_EXTENSIONS:
        raise ValidationError("Media reference must point to an uploaded file")
    if expected_kind and kind != expected_kind:
        raise ValidationError(f"Referenced file is not a valid {expected_kind}")

    return _write(kind, extension, lambda target: shutil.copyfile(source, target))


def local_path(media_path):
    """
    Map a stored relative media path onto MEDIA_ROOT.
    Returns None for anything outside the media directory.
    """
    if not media_path:
        return None

    prefix = _url_prefix() + "/"
    if not media_path.startswith(prefix):
        return None

    root = _media_root()
    candidate = os.path.normpath(os.path.join(root, media_path[len(prefix):]))
    if os.path.commonpath([root, candidate]) != root:
        return None
    return candidate


def delete_file(media_path):
    """
    Best-effort removal of a stored media file.
    Never raises; returns True only when a file was removed.
    """
    file_path = local_path(media_path)
    if file_path is None:
        return False

    if not os.path.exists(file_path):
        current_app.logger.warning(f"Media file already absent: {media_path}")
        return False

    try:
        os.remove(file_path)
        return True
    except OSError as e:
        current_app.logger.warning(f"Failed to delete file {file_path}: {e}")
        return False


def delete_files(media_paths):
    for media_path in media_paths:
        delete_file(media_path)


def base_url():
    configured = current_app.config.get("PUBLIC_BASE_URL")
    if configured:
        return configured.rstrip("/")
    if has_request_context():
        return request.host_url.rstrip("/")
    return ""


def public_url(media_path):
    """Absolute URL for a stored relative media path."""
    if not media_path:
        return None
    if media_path.startswith(("http://", "https://", "data:")):
        return media_path
    return f"{base_url()}{media_path}"


def to_relative(value):
    """
    Normalize a client-supplied media reference back to a stored path.
    Accepts a relative path or an absolute URL pointing at this server.
    """
    origin = base_url()
    if origin and value.startswith(origin + _url_prefix() + "/"):
        value = value[len(origin):]
    if local_path(value) is None:
        raise ValidationError("Media reference must point to an uploaded file")
    return value


@contextmanager
def cleanup_on_error(*media_paths):
    """Remove freshly written media files when the wrapped block raises."""
    try:
        yield
    except Exception:
        delete_files(path for path in media_paths if path)
        raise


@contextmanager
def staged_upload(file, expected_kind=None):
    """
    Save ``file`` (if any) and yield its media path.
    The file is removed again when the wrapped block raises.
    """
    media_path = save_file(file, expected_kind) if file else None
    with cleanup_on_error(media_path):
        yield media_path
