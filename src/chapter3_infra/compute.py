"""
ECS backend service construct.

Runs the back-end container on Fargate inside its own VPC and exposes it
through an internet-facing Application Load Balancer. The task role is
granted read/write access to the main DynamoDB table.
"""

from aws_cdk import (
    CfnOutput,
    Duration,
    Stack,
    aws_ec2 as ec2,
    aws_ecs as ecs,
    aws_elasticloadbalancingv2 as elbv2,
)
from constructs import Construct

from chapter3_infra.config import ServiceSettings
from chapter3_infra.database import TableConstruct


class BackendServiceConstruct(Construct):
    """
    Construct that deploys the back-end container behind a load balancer.

    Attributes:
        dynamodb: The table construct the service is granted access to
        vpc: Network spanning two availability zones
        cluster: ECS cluster with EC2 auto-scaling capacity
        task_definition: Fargate task blueprint
        container: The single application container
        service: Fargate service running the task
        load_balancer: Internet-facing ALB
        listener: Public listener forwarding to the service
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        dynamodb: TableConstruct,
        settings: ServiceSettings | None = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        settings = settings or ServiceSettings()
        self.dynamodb = dynamodb

        self.vpc = ec2.Vpc(self, "Vpc", max_azs=settings.max_azs)

        self.cluster = ecs.Cluster(self, "EcsCluster", vpc=self.vpc)
        self.cluster.add_capacity(
            "DefaultAutoScalingGroup",
            instance_type=ec2.InstanceType(settings.instance_type),
        )

        # The image is built from the local Dockerfile and pushed to ECR by the CDK CLI
        self.task_definition = ecs.FargateTaskDefinition(self, "TaskDefinition")
        self.container = self.task_definition.add_container(
            settings.container_name,
            image=ecs.ContainerImage.from_asset(str(settings.source_dir)),
            memory_limit_mib=settings.memory_limit_mib,
            logging=ecs.LogDrivers.aws_logs(stream_prefix=settings.log_stream_prefix),
        )
        self.container.add_port_mappings(
            ecs.PortMapping(
                container_port=settings.container_port,
                protocol=ecs.Protocol.TCP,
            )
        )

        self.service = ecs.FargateService(
            self,
            "Service",
            cluster=self.cluster,
            task_definition=self.task_definition,
        )

        self.load_balancer = elbv2.ApplicationLoadBalancer(
            self,
            "LB",
            vpc=self.vpc,
            internet_facing=True,
        )
        self.listener = self.load_balancer.add_listener(
            "PublicListener",
            port=settings.listener_port,
            open=True,
        )

        # Target must name the same container and port as the mapping above
        self.listener.add_targets(
            "ECS",
            port=settings.container_port,
            targets=[
                self.service.load_balancer_target(
                    container_name=settings.container_name,
                    container_port=settings.container_port,
                )
            ],
            health_check=elbv2.HealthCheck(
                path=settings.health_check_path,
                interval=Duration.seconds(settings.health_check_interval_seconds),
                timeout=Duration.seconds(settings.health_check_timeout_seconds),
            ),
        )

        dynamodb.main_table.grant_read_write_data(self.task_definition.task_role)

        CfnOutput(
            Stack.of(self),
            "BackendURL",
            value=self.load_balancer.load_balancer_dns_name,
            description="Backend load balancer DNS name",
        )
