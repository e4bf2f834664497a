from showcase.utils.media import public_url


def normalize_feature(feature):
    return {
        "id": feature.id,
        "project_id": feature.project_id,
        "title": feature.title,
        "subtitle": feature.subtitle,
        "icon_key": feature.icon_key,
        "media_type": feature.media_type,
        "media_url": public_url(feature.media_url)
    }
