from showcase.models.project_config import CONFIG_FLAGS


def normalize_config(config):
    data = {"project_id": config.project_id}
    for key, column in CONFIG_FLAGS.items():
        data[key] = bool(getattr(config, column))
    return data
