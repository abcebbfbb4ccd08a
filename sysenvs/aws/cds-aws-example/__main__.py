# This file is boilerplate. Copy it to any new projects you create.
# Its purpose is to call the launcher that exists as part of `cds_constructs`.
# From there, the module to run is picked from the stack name: a stack named `terraform-backend` runs
# `cds_constructs/modules/aws/terraform_backend` with the `terraform-backend:*` configuration keys.
from cds_constructs.launcher import run_active_stack

run_active_stack("aws")
