"""Driver for an external Cosmos SDK chain binary."""

import asyncio
import json
import logging
import os
import subprocess
from typing import Any, Callable, List, Optional, Sequence, Tuple

import aiohttp
from aiohttp import ClientTimeout
import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import ParseError

from ..constants import (
    DEFAULT_KEYRING_BACKEND,
    DEFAULT_TIMEOUT,
    READY_POLL_INTERVAL,
    USER_AGENT,
)
from ..exceptions import ChainCommandError, ChainError, KeyRingError
from ..keyring import KeyFile, KeyRing
from .process import ChildProcess
from .util import pipe_to_file, random_u32
from .wallet import Wallet, WalletAddress, WalletId

__all__ = ["ChainCommand"]

logger = logging.getLogger(__name__)

CONFIG_FILE = "config/config.toml"


class ChainCommand:
    """
    Runs a chain binary (``gaiad``, ``simd``, ...) against one home directory.

    Keys created through :meth:`add_wallet` are restored into ``keyring`` so
    the relayer side can sign for them.
    """

    def __init__(
        self,
        command_path: str,
        chain_id: str,
        home_path: str,
        rpc_port: int,
        grpc_port: int,
        p2p_port: int,
        keyring: Optional[KeyRing] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.command_path = command_path
        self.chain_id = chain_id
        self.home_path = home_path
        self.rpc_port = rpc_port
        self.grpc_port = grpc_port
        self.p2p_port = p2p_port
        self.keyring = keyring if keyring is not None else KeyRing.init()
        self.timeout = timeout
        self._logger = logging.getLogger(f"{__name__}.ChainCommand.{chain_id}")

    @property
    def rpc_address(self) -> str:
        return f"http://localhost:{self.rpc_port}"

    @property
    def websocket_address(self) -> str:
        return f"ws://localhost:{self.rpc_port}/websocket"

    @property
    def grpc_address(self) -> str:
        return f"http://localhost:{self.grpc_port}"

    @property
    def rpc_listen_address(self) -> str:
        return f"tcp://localhost:{self.rpc_port}"

    @property
    def grpc_listen_address(self) -> str:
        return f"localhost:{self.grpc_port}"

    def exec(self, args: Sequence[str]) -> str:
        """
        Run the binary and return its stdout.

        Raises:
            ChainCommandError: If the binary cannot be started or exits
                with a non-zero status
        """
        self._logger.debug(f"Executing command {self.command_path} with arguments {list(args)}")

        try:
            output = subprocess.run(
                [self.command_path, *args],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ChainCommandError(f"Failed to run {self.command_path}: {e}") from e

        if output.returncode == 0:
            message = output.stdout.decode("utf-8")
            self._logger.debug(f"Command executed successfully ({len(message)} bytes of output)")
            return message

        stderr = output.stderr.decode("utf-8", errors="replace")
        raise ChainCommandError(
            f"Command exited with error status {output.returncode} and message: {stderr}",
            status=output.returncode,
            stderr=stderr,
        )

    def help(self) -> None:
        self.exec(["--help"])

    def initialize(self) -> None:
        self.exec([
            "--home", self.home_path,
            "--chain-id", self.chain_id,
            "init", self.chain_id,
        ])

    def _path(self, file_path: str) -> str:
        return os.path.join(self.home_path, file_path)

    def write_file(self, file_path: str, content: str) -> None:
        """Write a file relative to the chain home."""
        full_path = self._path(file_path)
        try:
            with open(full_path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise ChainError(f"Failed to write {full_path}: {e}") from e
        self._logger.debug(f"Created new file {full_path}")

    def read_file(self, file_path: str) -> str:
        """Read a file relative to the chain home."""
        full_path = self._path(file_path)
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise ChainError(f"Failed to read {full_path}: {e}") from e

    def add_random_wallet(self, prefix: str) -> Wallet:
        return self.add_wallet(f"{prefix}-{random_u32():x}")

    def add_wallet(self, wallet_id: str) -> Wallet:
        """
        Create a key with the chain binary and restore it into the key ring.

        The raw ``keys add`` output, mnemonic included, is kept in
        ``<wallet_id>-seed.json`` under the chain home.
        """
        seed_content = self.exec([
            "--home", self.home_path,
            "keys", "add", wallet_id,
            "--keyring-backend", DEFAULT_KEYRING_BACKEND,
            "--output", "json",
        ])

        try:
            key_file = KeyFile.from_json(seed_content)
        except KeyRingError as e:
            raise ChainError(f"Unexpected output from keys add: {e}") from e

        self.write_file(f"{wallet_id}-seed.json", seed_content)

        raw_address = self.keyring.add_from_key_file(key_file)
        key = self.keyring.get(raw_address)
        self._logger.info(f"Added wallet {wallet_id} with address {key_file.address}")

        return Wallet(
            id=WalletId(wallet_id),
            address=WalletAddress(key_file.address),
            raw_address=raw_address,
            key=key,
        )

    def add_genesis_account(
        self,
        wallet: WalletAddress,
        amounts: List[Tuple[str, int]],
    ) -> None:
        amounts_str = ",".join(f"{amount}{denom}" for denom, amount in amounts)
        self.exec([
            "--home", self.home_path,
            "add-genesis-account", wallet, amounts_str,
        ])

    def add_genesis_validator(self, wallet_id: WalletId, denom: str, amount: int) -> None:
        self.exec([
            "--home", self.home_path,
            "gentx", wallet_id,
            "--keyring-backend", DEFAULT_KEYRING_BACKEND,
            "--chain-id", self.chain_id,
            f"{amount}{denom}",
        ])

    def collect_gen_txs(self) -> None:
        self.exec(["--home", self.home_path, "collect-gentxs"])

    def update_chain_config(self, update: Callable[[TOMLDocument], None]) -> None:
        """
        Read-modify-write ``config/config.toml``.

        ``update`` mutates the parsed document in place; formatting and
        comments of untouched keys are kept.
        """
        content = self.read_file(CONFIG_FILE)
        try:
            config = tomlkit.parse(content)
        except ParseError as e:
            raise ChainError(f"Invalid chain config: {e}") from e

        update(config)

        self.write_file(CONFIG_FILE, tomlkit.dumps(config))

    def start(self) -> ChildProcess:
        """
        Start the chain, piping stdout and stderr to log files in its home.
        """
        args = [
            self.command_path,
            "--home", self.home_path,
            "start",
            "--pruning", "nothing",
            "--grpc.address", self.grpc_listen_address,
            "--rpc.laddr", self.rpc_listen_address,
        ]
        self._logger.debug(f"Starting chain with arguments {args[1:]}")

        try:
            child = subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise ChainCommandError(f"Failed to start {self.command_path}: {e}") from e

        pipes = [
            pipe_to_file(child.stdout, self._path("stdout.log")),
            pipe_to_file(child.stderr, self._path("stderr.log")),
        ]

        self._logger.info(f"Started chain {self.chain_id} with pid {child.pid}")
        return ChildProcess(child, pipes)

    def query_balance(self, wallet: WalletAddress, denom: str) -> int:
        res = self.exec([
            "--node", self.rpc_listen_address,
            "query", "bank", "balances", wallet,
            "--denom", denom,
            "--output", "json",
        ])

        try:
            return int(json.loads(res)["amount"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise ChainError(f"Unexpected balance output: {res!r}") from e

    async def wait_until_ready(
        self,
        timeout: Optional[float] = None,
        interval: float = READY_POLL_INTERVAL,
    ) -> Any:
        """
        Poll the RPC ``/status`` endpoint until the node answers.

        Returns:
            Decoded status response

        Raises:
            ChainError: If the node does not answer in time
        """
        timeout = self.timeout if timeout is None else timeout
        url = f"{self.rpc_address}/status"
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        last_error: Optional[BaseException] = None

        async with aiohttp.ClientSession(
            timeout=ClientTimeout(total=interval * 4),
            headers={"User-Agent": USER_AGENT},
        ) as session:
            while loop.time() < deadline:
                try:
                    async with session.get(url) as response:
                        if response.status == 200:
                            status = await response.json(content_type=None)
                            self._logger.info(f"Chain {self.chain_id} is ready")
                            return status
                        last_error = ChainError(f"HTTP {response.status}")
                except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                    last_error = e
                await asyncio.sleep(interval)

        raise ChainError(
            f"Chain {self.chain_id} not ready after {timeout}s: {last_error}"
        ) from last_error

    def __repr__(self) -> str:
        return f"ChainCommand(chain_id={self.chain_id!r}, home={self.home_path!r})"
