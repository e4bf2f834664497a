from showcase.application import sections as section_service
from showcase.models.section import Section
from showcase.normalizers import envelope
from showcase.normalizers.section import normalize_section
from showcase.utils.lookup import get_or_404
from showcase.utils.validation import request_data
from . import api_bp


# ------------------------
# Sections
# ------------------------

@api_bp.route("/sections", methods=["GET"])
def list_sections():
    sections = Section.query.order_by(Section.id.asc()).all()
    return envelope([normalize_section(s) for s in sections])


@api_bp.route("/sections/<int:section_id>", methods=["GET"])
def get_section(section_id):
    section = get_or_404(Section, section_id, "Section")
    return envelope(normalize_section(section))


@api_bp.route("/sections", methods=["POST"])
def create_section():
    section = section_service.create_section(data=request_data())
    return envelope(normalize_section(section), "Section created successfully", 201)


@api_bp.route("/sections/<int:section_id>", methods=["PUT"])
def update_section(section_id):
    section = section_service.rename_section(section_id=section_id, data=request_data())
    return envelope(normalize_section(section), "Section updated successfully")


@api_bp.route("/sections/<int:section_id>", methods=["DELETE"])
def delete_section(section_id):
    section_service.delete_section(section_id=section_id)
    return envelope({"id": section_id}, "Section deleted successfully")
