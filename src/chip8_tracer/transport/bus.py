# chip8_tracer/transport/bus.py
"""
Transport Layer (メモリバス)

CHIP-8の4KBアドレス空間をバイト単位のデバイス（フォントROM、RAM）に割り当て、
命令実行による読み書きを記録します。ローダーとインスペクタ向けに、記録を残さない
load / peek の経路も提供します。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Tuple
import warnings

# @intent:responsibility 記録されたアクセスの種別です。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 命令実行中の1バイトのアクセスを記録します。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int
    access_type: BusAccessType

# @intent:data_structure アドレス範囲 [start, end] とそこに割り当てたデバイス。
class MemoryRegion(NamedTuple):
    start: int
    end: int
    device: "Device"

    def contains(self, address: int) -> bool:
        return self.start <= address <= self.end

# @intent:responsibility バスに接続するバイトデバイスの共通インターフェースです。
class Device(ABC):
    """
    アドレスはデバイス先頭からのオフセットで渡されます。
    """
    @abstractmethod
    def read(self, offset: int) -> int:
        pass

    # @intent:pre-condition dataは0-255である必要があります。
    @abstractmethod
    def write(self, offset: int, data: int) -> None:
        pass

    # @intent:responsibility 命令実行を経由しない初期化用の書き込みです。既定ではwriteと同じです。
    def load_data(self, offset: int, data: int) -> None:
        self.write(offset, data)

# @intent:responsibility 固定長の読み書き可能なメモリです。
class RAM(Device):
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError(f"{type(self).__name__} size must be a positive integer, got {size!r}.")
        self._size = size
        self._cells = bytearray(size)

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset < self._size:
            raise IndexError(f"Offset {offset} outside {type(self).__name__} of {self._size} bytes.")

    def read(self, offset: int) -> int:
        self._check_offset(offset)
        return self._cells[offset]

    def write(self, offset: int, data: int) -> None:
        self._check_offset(offset)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Value {data} does not fit in a byte.")
        self._cells[offset] = data

    def clear(self) -> None:
        self._cells = bytearray(self._size)

    def get_size(self) -> int:
        return self._size

# @intent:responsibility フォント領域の保護に使う読み込み専用メモリです。
# @intent:rationale 命令からの書き込みは例外にせず無視し、RuntimeWarningで知らせます。
class ROM(RAM):
    def write(self, offset: int, data: int) -> None:
        self._check_offset(offset)
        warnings.warn(f"Ignored write of {data:#04x} to read-only offset {offset:#05x}.", RuntimeWarning, stacklevel=3)

    def load_data(self, offset: int, data: int) -> None:
        super().write(offset, data)

# @intent:responsibility アドレスをデバイスへ振り分け、命令実行中のアクセスを記録します。
class Bus:
    """
    read / write はアクティビティログに記録され、1命令ごとにSnapshotへ移されます。
    peek / load はログに残らない経路で、逆アセンブラ・UI・ROMローダーが使用します。
    """
    def __init__(self):
        self._regions: List[MemoryRegion] = []
        self._activity: List[BusAccess] = []

    # @intent:pre-condition 0 <= start <= end であり、RAM系デバイスの大きさは範囲と一致する必要があります。
    # @intent:rationale 範囲の重複は検査しません。先に登録した領域が優先されます。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        if not 0 <= start_address <= end_address:
            raise ValueError(f"Invalid address range {start_address:#x}-{end_address:#x}.")
        if not isinstance(device, Device):
            raise TypeError(f"{type(device).__name__} is not a Device.")
        span = end_address - start_address + 1
        if isinstance(device, RAM) and device.get_size() != span:
            raise ValueError(
                f"{type(device).__name__} of {device.get_size()} bytes cannot cover a {span}-byte range."
            )
        self._regions.append(MemoryRegion(start_address, end_address, device))

    def get_devices(self) -> List[Tuple[int, int, Device]]:
        return [tuple(region) for region in self._regions]

    # @intent:responsibility マップ済みアドレス空間の大きさ（最終アドレス+1）を返します。
    def get_size(self) -> int:
        return max((region.end + 1 for region in self._regions), default=0)

    def _resolve(self, address: int) -> Tuple[Device, int]:
        for region in self._regions:
            if region.contains(address):
                return region.device, address - region.start
        raise IndexError(f"No device mapped at {address:#06x}.")

    def read(self, address: int) -> int:
        device, offset = self._resolve(address)
        data = device.read(offset)
        self._activity.append(BusAccess(address, data, BusAccessType.READ))
        return data

    # @intent:post-condition ROMへの書き込みもデバイス側で無視された上でログには記録されます。
    def write(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        device.write(offset, data)
        self._activity.append(BusAccess(address, data, BusAccessType.WRITE))

    def peek(self, address: int) -> int:
        device, offset = self._resolve(address)
        return device.read(offset)

    # @intent:responsibility ローダー専用の書き込み口です。ROMにも書き込め、ログは記録しません。
    def load(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        device.load_data(offset, data)

    # @intent:responsibility 記録済みのアクセスを取り出し、ログを空にします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        activity, self._activity = self._activity, []
        return activity
