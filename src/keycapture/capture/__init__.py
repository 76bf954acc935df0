# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Capture stages
# stage 2: accumulate held tokens into a chord while a capture session is listening
# stage 3: commit the serialized chord to a binding store, or discard it
# elsewhere, held tokens are matched against stored bindings to trigger shortcuts
