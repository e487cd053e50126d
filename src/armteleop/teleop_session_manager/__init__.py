# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from .teleop_session import SessionStepResult, TeleopSession
from .config import TeleopSessionConfig

__all__ = [
    "SessionStepResult",
    "TeleopSession",
    "TeleopSessionConfig",
]
