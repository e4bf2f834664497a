from showcase.utils.media import public_url


def normalize_team_member(member):
    return {
        "id": member.id,
        "project_id": member.project_id,
        "name": member.name,
        "role": member.role,
        "bio": member.bio,
        "avatar": public_url(member.avatar)
    }
