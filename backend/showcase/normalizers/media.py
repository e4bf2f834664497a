from showcase.utils.media import public_url


def normalize_upload(media_path):
    return {
        "path": media_path,
        "fileUrl": public_url(media_path)
    }
