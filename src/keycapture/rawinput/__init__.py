# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Raw input stages
# stage 0: toolkit-specific; deliver key and pointer events to an InputDispatcher, or replay a recording
# stage 1: normalize each key or button into a canonical lowercase token
