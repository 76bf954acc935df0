# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later


class KeycaptureError(Exception):
    pass


class RecordingError(KeycaptureError):
    pass
