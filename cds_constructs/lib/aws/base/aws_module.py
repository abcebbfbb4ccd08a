from abc import ABC
from typing import Optional

from pulumi import Config, ResourceOptions

from cds_constructs.lib.base import BaseModule, ConfigType
from ..identity import get_account_id, get_partition_name


class AWSModule(BaseModule, ABC):
    """
    Base class for modules using the AWS provider
    """

    provider: str = "aws"

    def __init__(self, name: str, config: ConfigType, opts: Optional[ResourceOptions] = None):
        super().__init__(name, config, opts)

        self.region = Config(self.provider).require("region")
        self.aws_account_id = get_account_id()
        self.partition = get_partition_name()
