from typing import Optional

from ..config import get_project, get_stack, get_team, tag_prefix


def get_tags(service: str, role: str, group: Optional[str] = None) -> dict:
    """
    Generate tag dict for resources

    example tags:
      terraform state bucket:
        Name = s3-private-terraform-state
               service-role-group
        cds:service = s3
        cds:role = private
        cds:group = terraform-state
        cds:team = infrastructure
        cds:createdby = pulumi
        cds:stack = terraform-backend
        cds:project = infrastructure

      access log bucket:
        Name = s3-log
               service-role
        cds:service = s3
        cds:role = log
        cds:group = main
        cds:createdby = pulumi
        cds:stack = s3
        cds:project = infrastructure

    :param service: This resource's "namespace" (s3, kms,...)
    :param role: The role this resource performs within the namespace (private, log, website,...)
    :param group: The group this resource belongs to (usually the bucket name). Leave unset to use "main".
    :return: Dict of tags
    """

    group_name = group or "main"
    group_suffix = f"-{group}" if group else ""

    tags = {
        "Name": f"{service}-{role}{group_suffix}",
        f"{tag_prefix}service": service,
        f"{tag_prefix}role": role,
        f"{tag_prefix}group": group_name,
        f"{tag_prefix}createdby": "pulumi",
        f"{tag_prefix}stack": get_stack(),
        f"{tag_prefix}project": get_project(),
    }

    if team := get_team():
        tags[f"{tag_prefix}team"] = team

    return tags
