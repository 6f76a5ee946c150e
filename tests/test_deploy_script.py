"""
Tests for the SAVI deployment script
"""

import pytest
from unittest.mock import Mock, patch

from scripts import deploy_savi_token
from utils.deploy_config import PLACEHOLDER_ADDRESS
from conftest import DEPLOYER, IMPLEMENTATION, PROXY, USDT


@pytest.fixture
def savi_token():
    """Deployed proxy handle returned by the deployer"""
    savi_token = Mock()
    savi_token.get_address.return_value = PROXY
    savi_token.implementation_address.return_value = IMPLEMENTATION
    return savi_token


@pytest.fixture
def collaborators(savi_token, monkeypatch):
    """Patch signer, artifact, manifest and proxy deployment collaborators"""
    monkeypatch.delenv('SAVI_USDT_ADDRESS', raising=False)
    monkeypatch.delenv('SAVI_TREASURY_ADDRESS', raising=False)

    with patch.object(deploy_savi_token, 'SignerManager') as signer_manager, \
            patch.object(deploy_savi_token, 'get_contract_factory') as get_factory, \
            patch.object(deploy_savi_token, 'DeploymentManifest') as manifest, \
            patch.object(deploy_savi_token, 'ProxyDeployer') as proxy_deployer:
        signer_manager.return_value.get_deployer.return_value = Mock(address=DEPLOYER)
        proxy_deployer.return_value.deploy_proxy.return_value = savi_token

        yield {
            'signer_manager': signer_manager,
            'get_factory': get_factory,
            'manifest': manifest,
            'proxy_deployer': proxy_deployer,
            'deploy_proxy': proxy_deployer.return_value.deploy_proxy
        }


class TestDeploySaviToken:
    """Test deploy_savi_token"""

    def test_deploy_proxy_called_once_with_initializer_args(self, collaborators):
        deploy_savi_token.deploy_savi_token(Mock())

        collaborators['get_factory'].assert_called_once_with("SAVI")
        collaborators['deploy_proxy'].assert_called_once_with(
            collaborators['get_factory'].return_value,
            [PLACEHOLDER_ADDRESS, PLACEHOLDER_ADDRESS, 10_000_000, 10_000_000_000],
            initializer="initialize",
            kind="uups"
        )

    def test_returns_and_logs_deployed_address(self, collaborators, savi_token, log_messages):
        address = deploy_savi_token.deploy_savi_token(Mock())

        assert address == PROXY
        savi_token.wait_for_deployment.assert_called_once()
        assert f"Deploying contracts with the account: {DEPLOYER}" in log_messages
        assert f"SAVI token deployed to: {PROXY}" in log_messages
        assert f"Implementation address: {IMPLEMENTATION}" in log_messages

    def test_environment_overrides(self, collaborators, monkeypatch):
        monkeypatch.setenv('SAVI_USDT_ADDRESS', USDT)
        monkeypatch.setenv('SAVI_TREASURY_ADDRESS', DEPLOYER)

        deploy_savi_token.deploy_savi_token(Mock())

        args = collaborators['deploy_proxy'].call_args[0][1]
        assert args == [USDT, DEPLOYER, 10_000_000, 10_000_000_000]

    def test_manifest_for_connected_chain(self, collaborators):
        w3 = Mock()
        w3.eth.chain_id = 31337

        deploy_savi_token.deploy_savi_token(w3)

        collaborators['manifest'].assert_called_once_with(31337)


class TestMain:
    """Test exit codes"""

    @pytest.fixture(autouse=True)
    def no_logging_setup(self):
        with patch.object(deploy_savi_token, 'setup_logging'), \
                patch.object(deploy_savi_token, 'RPCManager'):
            yield

    def test_success_exit_code(self, collaborators):
        assert deploy_savi_token.main() == 0

    @pytest.mark.parametrize('failing', ['signer_manager', 'get_factory', 'deploy_proxy'])
    def test_collaborator_error_exit_code(self, collaborators, log_messages, failing):
        if failing == 'signer_manager':
            collaborators['signer_manager'].return_value.get_deployer.side_effect = ValueError("No deployer account")
        elif failing == 'get_factory':
            collaborators['get_factory'].side_effect = FileNotFoundError("Contract artifact not found: SAVI")
        else:
            collaborators['deploy_proxy'].side_effect = RuntimeError("execution reverted")

        assert deploy_savi_token.main() == 1
        assert not any("deployed to" in message for message in log_messages)
        assert any(message.startswith("Deployment failed") for message in log_messages)

    def test_wait_error_exit_code(self, collaborators, savi_token, log_messages):
        savi_token.wait_for_deployment.side_effect = TimeoutError("receipt not available")

        assert deploy_savi_token.main() == 1
        assert not any(PROXY in message for message in log_messages)

    def test_implementation_lookup_error_exit_code(self, collaborators, savi_token, log_messages):
        savi_token.implementation_address.side_effect = RuntimeError("eth_getStorageAt unsupported")

        assert deploy_savi_token.main() == 1
        assert not any("deployed to" in message for message in log_messages)
        assert any(message.startswith("Deployment failed") for message in log_messages)

    def test_connection_error_exit_code(self, collaborators):
        deploy_savi_token.RPCManager.return_value.connect.side_effect = ConnectionError("No RPC endpoint reachable")

        assert deploy_savi_token.main() == 1
        collaborators['deploy_proxy'].assert_not_called()
