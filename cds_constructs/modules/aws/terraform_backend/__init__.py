from .terraform_backend import TerraformBackend
